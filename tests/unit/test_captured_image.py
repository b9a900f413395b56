"""
Unit tests for the CapturedImage model and its sync lifecycle.
"""
from datetime import datetime, timezone

import pytest

from ppe_monitor.domain.models.captured_image import CapturedImage, SyncState, can_transition
from ppe_monitor.exceptions import InvalidSyncTransitionError


def _capture(**overrides) -> CapturedImage:
    fields = {
        "id": "cap-1",
        "image_ref": "",
        "timestamp": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return CapturedImage(**fields)


class TestCapturedImage:
    """Tests for CapturedImage validation"""

    def test_requires_id(self):
        with pytest.raises(ValueError, match="Capture ID is required"):
            _capture(id="")

    def test_confidence_is_clamped(self):
        assert _capture(confidence=4).confidence == 1.0
        assert _capture(confidence=-1).confidence == 0.0

    def test_embedded_reference(self):
        assert _capture(image_ref="data:image/jpeg;base64,AAAA").is_embedded is True
        assert _capture(image_ref="http://host/api/v1/captures/objects/x.jpg").is_embedded is False


class TestSyncTransitions:
    """Tests for the captured → upload_pending → synced | local_only lifecycle"""

    def test_happy_path(self):
        capture = _capture().transition(SyncState.UPLOAD_PENDING).transition(SyncState.SYNCED)
        assert capture.sync_state is SyncState.SYNCED

    def test_local_only_can_later_sync(self):
        capture = _capture().transition(SyncState.UPLOAD_PENDING).transition(SyncState.LOCAL_ONLY)
        assert capture.transition(SyncState.SYNCED).sync_state is SyncState.SYNCED

    def test_transition_returns_a_copy(self):
        original = _capture()
        moved = original.transition(SyncState.UPLOAD_PENDING)
        assert original.sync_state is SyncState.CAPTURED
        assert moved.sync_state is SyncState.UPLOAD_PENDING

    @pytest.mark.parametrize("current,target", [
        (SyncState.CAPTURED, SyncState.SYNCED),
        (SyncState.CAPTURED, SyncState.LOCAL_ONLY),
        (SyncState.SYNCED, SyncState.LOCAL_ONLY),
        (SyncState.SYNCED, SyncState.UPLOAD_PENDING),
        (SyncState.LOCAL_ONLY, SyncState.UPLOAD_PENDING),
    ])
    def test_forbidden_transitions(self, current, target):
        assert can_transition(current, target) is False
        with pytest.raises(InvalidSyncTransitionError):
            _capture(sync_state=current).transition(target)
