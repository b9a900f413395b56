"""
Integration tests for the analysis API endpoints.
"""
from unittest.mock import AsyncMock

import pytest

pytestmark = pytest.mark.integration

from ppe_monitor.application.use_cases.analysis.analyze_frame import AnalyzeFrameUseCase
from ppe_monitor.application.use_cases.capture.persist_capture import PersistCaptureUseCase
from ppe_monitor.domain.models.captured_image import PersistOutcome, SyncState
from ppe_monitor.domain.models.equipment import EquipmentId
from ppe_monitor.exceptions import (
    MalformedResponseError,
    QuotaExceededError,
    RateLimitedError,
    ValidationFailure,
    VisionGatewayError,
)
from ppe_monitor.infrastructure.media.image_utils import to_data_uri
from tests.helpers import make_result


def _analysis(*equipment):
    return AnalyzeFrameUseCase(vision_client=AsyncMock()).describe(make_result(*equipment))


@pytest.fixture
def mock_analyze_use_case(registry):
    uc = AsyncMock(spec=AnalyzeFrameUseCase)
    registry[AnalyzeFrameUseCase] = uc
    return uc


@pytest.fixture
def mock_persist_use_case(registry):
    uc = AsyncMock(spec=PersistCaptureUseCase)
    registry[PersistCaptureUseCase] = uc
    return uc


class TestAnalyzeEndpoint:
    """Tests for POST /api/v1/analysis"""

    def test_success(self, client, mock_analyze_use_case, jpeg_bytes):
        mock_analyze_use_case.execute.return_value = _analysis(EquipmentId.HELMET, EquipmentId.VEST)
        response = client.post(
            "/api/v1/analysis",
            json={"image": to_data_uri(jpeg_bytes), "format": "detailed"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["person_count"] == 1
        assert data["detected"] == ["helmet", "vest"]
        assert data["coverage_confidence"] == pytest.approx(2 / 6)
        assert data["alert"]["level"] == "warning"
        _, kwargs = mock_analyze_use_case.execute.await_args
        assert kwargs["response_format"].value == "detailed"

    @pytest.mark.parametrize("error,status", [
        (ValidationFailure("Please select a valid image file"), 400),
        (ValidationFailure("too big", too_large=True), 413),
        (RateLimitedError(), 429),
        (QuotaExceededError(), 402),
        (MalformedResponseError("no json"), 502),
        (VisionGatewayError("boom", status_code=500), 502),
    ])
    def test_error_mapping(self, client, mock_analyze_use_case, jpeg_bytes, error, status):
        mock_analyze_use_case.execute.side_effect = error
        response = client.post("/api/v1/analysis", json={"image": to_data_uri(jpeg_bytes)})
        assert response.status_code == status
        assert response.json()["detail"] == error.user_message

    def test_unknown_format_is_rejected(self, client, mock_analyze_use_case, jpeg_bytes):
        response = client.post("/api/v1/analysis", json={"image": to_data_uri(jpeg_bytes), "format": "xml"})
        assert response.status_code == 422


class TestUploadEndpoint:
    """Tests for POST /api/v1/analysis/upload"""

    def test_upload_with_equipment_is_persisted(self, client, mock_analyze_use_case, mock_persist_use_case, jpeg_bytes):
        mock_analyze_use_case.analyze_bytes.return_value = _analysis(EquipmentId.HELMET)
        mock_persist_use_case.execute.return_value = PersistOutcome(
            capture_id="cap-1",
            state=SyncState.LOCAL_ONLY,
            image_ref="data:image/jpeg;base64,AAAA",
            confidence=0.3,
            warning="Remote storage is unavailable. Working offline.",
        )

        response = client.post("/api/v1/analysis/upload", files={"file": ("frame.jpg", jpeg_bytes, "image/jpeg")})

        assert response.status_code == 200
        data = response.json()
        assert data["analysis"]["detected"] == ["helmet"]
        assert data["capture"]["state"] == "local_only"
        assert data["capture"]["warning"]

    def test_upload_without_person_is_not_persisted(self, client, mock_analyze_use_case, mock_persist_use_case, jpeg_bytes):
        mock_analyze_use_case.analyze_bytes.return_value = _analysis()

        response = client.post("/api/v1/analysis/upload", files={"file": ("frame.jpg", jpeg_bytes, "image/jpeg")})

        assert response.status_code == 200
        assert response.json()["capture"] is None
        mock_persist_use_case.execute.assert_not_awaited()

    def test_oversized_upload_returns_413(self, client, mock_analyze_use_case):
        too_big = b"\xff" * (11 * 1024 * 1024)
        response = client.post("/api/v1/analysis/upload", files={"file": ("big.jpg", too_big, "image/jpeg")})
        assert response.status_code == 413
        mock_analyze_use_case.analyze_bytes.assert_not_awaited()
