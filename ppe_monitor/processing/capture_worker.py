"""
Capture Persist Worker
----------------------

Background consumer that owns capture persistence. Producers (the analysis
loop and the captures endpoint) hand frames over with submit() and never
wait on storage; the worker drains the queue through PersistCaptureUseCase.
"""

# Standard library imports
import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

# Local application imports
from ..application.use_cases.capture.persist_capture import PersistCaptureUseCase, generate_capture_id
from ..domain.models.captured_image import PersistOutcome
from ..domain.models.detection import AnalysisResult

logger = logging.getLogger(__name__)


@dataclass
class CaptureJob:
    capture_id: str
    image: bytes
    analysis: AnalysisResult
    content_type: Optional[str] = None


class CapturePersistWorker:
    """Single consumer of capture jobs; one job is persisted at a time."""

    def __init__(
        self,
        persist_use_case: PersistCaptureUseCase,
        maxsize: int = 100,
        history_size: int = 50,
    ) -> None:
        self.persist_use_case = persist_use_case
        self._queue: "asyncio.Queue[CaptureJob]" = asyncio.Queue(maxsize=maxsize)
        self._task: Optional[asyncio.Task] = None
        self._outcomes: Deque[PersistOutcome] = deque(maxlen=history_size)
        self.dropped = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def recent_outcomes(self) -> List[PersistOutcome]:
        """Outcomes of the most recent jobs, newest last"""
        return list(self._outcomes)

    def submit(
        self,
        image: bytes,
        analysis: AnalysisResult,
        capture_id: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> Optional[str]:
        """
        Queue a capture without waiting

        Returns:
            The capture id, or None when the queue is full and the job was dropped
        """
        job = CaptureJob(
            capture_id=capture_id or generate_capture_id(),
            image=image,
            analysis=analysis,
            content_type=content_type,
        )
        try:
            self._queue.put_nowait(job)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(f"Capture queue full, dropping capture {job.capture_id}")
            return None
        logger.debug(f"Queued capture {job.capture_id} ({self.pending} pending)")
        return job.capture_id

    async def process(self, job: CaptureJob) -> PersistOutcome:
        outcome = await self.persist_use_case.execute(
            job.image,
            job.analysis,
            capture_id=job.capture_id,
            content_type=job.content_type,
        )
        self._outcomes.append(outcome)
        if outcome.warning:
            logger.warning(f"Capture {outcome.capture_id} stored as {outcome.state.value}: {outcome.warning}")
        return outcome

    async def _run(self) -> None:
        logger.info("Capture persist worker started")
        while True:
            job = await self._queue.get()
            try:
                await self.process(job)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Error persisting capture {job.capture_id}: {e}", exc_info=True)
            finally:
                self._queue.task_done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def join(self) -> None:
        """Wait until every queued job has been processed"""
        await self._queue.join()

    async def stop(self, drain_timeout: float = 5.0) -> None:
        """Give queued jobs a chance to finish, then cancel the consumer"""
        if self._task is None:
            return
        try:
            await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Capture worker stopping with {self.pending} job(s) still queued")
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Capture persist worker stopped")
