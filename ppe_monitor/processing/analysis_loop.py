"""
Analysis Loop
-------------

Fixed-period analysis of one camera stream. Each tick grabs a frame, sends
it to the vision model and hands frames showing a person with equipment to
the capture worker. A tick that fires while the previous analysis is still
running is dropped.
"""

# Standard library imports
import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

# Local application imports
from ..application.use_cases.analysis.analyze_frame import AnalyzeFrameUseCase, FrameAnalysis
from ..detection.alerts import should_capture
from ..exceptions import PPEMonitorError, get_user_message
from .capture_worker import CapturePersistWorker

logger = logging.getLogger(__name__)

FrameSource = Callable[[], Awaitable[Optional[bytes]]]


class AnalysisLoop:
    """Timer-driven analysis of a single stream."""

    def __init__(
        self,
        stream_id: str,
        frame_source: FrameSource,
        analyze_use_case: AnalyzeFrameUseCase,
        worker: Optional[CapturePersistWorker] = None,
        interval_seconds: float = 3.0,
    ) -> None:
        self.stream_id = stream_id
        self.frame_source = frame_source
        self.analyze_use_case = analyze_use_case
        self.worker = worker
        self.interval_seconds = interval_seconds
        self.last_analysis: Optional[FrameAnalysis] = None
        self.skipped_ticks = 0
        self._in_flight = False
        self._timer: Optional[asyncio.Task] = None
        self._ticks: Set[asyncio.Task] = set()

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def tick(self) -> Optional[FrameAnalysis]:
        """
        Run one analysis unless one is already in flight for this stream

        Returns:
            The analysis, or None when the tick was dropped, no frame was
            available or the analysis failed
        """
        if self._in_flight:
            self.skipped_ticks += 1
            logger.debug(f"[{self.stream_id}] analysis in flight, dropping tick")
            return None

        self._in_flight = True
        try:
            frame = await self.frame_source()
            if not frame:
                return None
            analysis = await self.analyze_use_case.analyze_bytes(frame)
        except PPEMonitorError as e:
            logger.warning(f"[{self.stream_id}] analysis failed: {e.message} ({get_user_message(e)})")
            return None
        finally:
            self._in_flight = False

        self.last_analysis = analysis
        if analysis.alert is not None:
            logger.info(f"[{self.stream_id}] {analysis.alert.title}: {analysis.alert.message}")
        if self.worker is not None and should_capture(analysis.result):
            self.worker.submit(frame, analysis.result)
        return analysis

    async def _guarded_tick(self) -> None:
        try:
            await self.tick()
        except Exception as e:
            logger.error(f"[{self.stream_id}] unexpected error during analysis tick: {e}", exc_info=True)

    async def _run(self) -> None:
        logger.info(f"[{self.stream_id}] analysis loop started (every {self.interval_seconds}s)")
        while True:
            task = asyncio.create_task(self._guarded_tick())
            self._ticks.add(task)
            task.add_done_callback(self._ticks.discard)
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self.running:
            return
        self._timer = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the timer and release the frame source; in-flight analyses finish on their own"""
        if self._timer is not None:
            self._timer.cancel()
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
            self._timer = None

        release = getattr(self.frame_source, "release", None)
        if callable(release):
            release()
        logger.info(f"[{self.stream_id}] analysis loop stopped")
