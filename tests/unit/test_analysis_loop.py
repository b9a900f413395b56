"""
Unit tests for AnalysisLoop (tick skipping and auto-capture).
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from ppe_monitor.application.use_cases.analysis.analyze_frame import AnalyzeFrameUseCase
from ppe_monitor.domain.models.equipment import EquipmentId
from ppe_monitor.exceptions import RateLimitedError
from ppe_monitor.processing.analysis_loop import AnalysisLoop
from tests.helpers import make_result


def _describe(result):
    return AnalyzeFrameUseCase(vision_client=AsyncMock()).describe(result)


@pytest.fixture
def frame_source():
    return AsyncMock(return_value=b"jpeg-frame")


@pytest.fixture
def analyze_use_case():
    use_case = MagicMock()
    use_case.analyze_bytes = AsyncMock(return_value=_describe(make_result(EquipmentId.HELMET)))
    return use_case


@pytest.fixture
def worker():
    return MagicMock()


class TestAnalysisLoop:
    """Tests for AnalysisLoop"""

    @pytest.mark.asyncio
    async def test_tick_with_equipment_submits_capture(self, frame_source, analyze_use_case, worker):
        loop = AnalysisLoop("cam", frame_source, analyze_use_case, worker=worker)

        analysis = await loop.tick()

        assert analysis is not None
        assert loop.last_analysis is analysis
        worker.submit.assert_called_once_with(b"jpeg-frame", analysis.result)
        assert loop.in_flight is False

    @pytest.mark.asyncio
    async def test_empty_frame_is_not_captured(self, frame_source, analyze_use_case, worker):
        analyze_use_case.analyze_bytes.return_value = _describe(make_result())
        loop = AnalysisLoop("cam", frame_source, analyze_use_case, worker=worker)

        await loop.tick()

        worker.submit.assert_not_called()

    @pytest.mark.asyncio
    async def test_tick_dropped_while_in_flight(self, frame_source, analyze_use_case, worker):
        release = asyncio.Event()
        result = _describe(make_result(EquipmentId.HELMET))

        async def slow_analysis(frame):
            await release.wait()
            return result

        analyze_use_case.analyze_bytes.side_effect = slow_analysis
        loop = AnalysisLoop("cam", frame_source, analyze_use_case, worker=worker)

        first = asyncio.create_task(loop.tick())
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert loop.in_flight is True

        assert await loop.tick() is None
        assert loop.skipped_ticks == 1

        release.set()
        assert await first is result
        assert analyze_use_case.analyze_bytes.await_count == 1
        assert loop.in_flight is False

    @pytest.mark.asyncio
    async def test_failed_analysis_clears_in_flight(self, frame_source, analyze_use_case, worker):
        analyze_use_case.analyze_bytes.side_effect = RateLimitedError()
        loop = AnalysisLoop("cam", frame_source, analyze_use_case, worker=worker)

        assert await loop.tick() is None
        assert loop.in_flight is False
        worker.submit.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_frame_skips_analysis(self, analyze_use_case, worker):
        loop = AnalysisLoop("cam", AsyncMock(return_value=None), analyze_use_case, worker=worker)
        assert await loop.tick() is None
        analyze_use_case.analyze_bytes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_start_and_stop_release_source(self, analyze_use_case, worker):
        frame_source = AsyncMock(return_value=b"jpeg-frame")
        frame_source.release = MagicMock()
        loop = AnalysisLoop("cam", frame_source, analyze_use_case, worker=worker, interval_seconds=0.01)

        loop.start()
        assert loop.running is True
        await asyncio.sleep(0.05)
        await loop.stop()

        assert loop.running is False
        assert analyze_use_case.analyze_bytes.await_count >= 1
        frame_source.release.assert_called_once()
