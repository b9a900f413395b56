# Standard library imports
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Tuple

# Local application imports
from ...exceptions import InvalidSyncTransitionError
from .equipment import EquipmentId


class SyncState(str, Enum):
    """Where a captured image currently lives."""

    CAPTURED = "captured"
    UPLOAD_PENDING = "upload_pending"
    SYNCED = "synced"
    LOCAL_ONLY = "local_only"


_TRANSITIONS: Dict[SyncState, FrozenSet[SyncState]] = {
    SyncState.CAPTURED: frozenset({SyncState.UPLOAD_PENDING}),
    SyncState.UPLOAD_PENDING: frozenset({SyncState.SYNCED, SyncState.LOCAL_ONLY}),
    SyncState.LOCAL_ONLY: frozenset({SyncState.SYNCED}),
    SyncState.SYNCED: frozenset(),
}


def can_transition(current: SyncState, target: SyncState) -> bool:
    return target in _TRANSITIONS[current]


@dataclass
class CapturedImage:
    """
    Pure domain model for a captured frame.

    image_ref is either the public URL of the stored object or, for records
    that only exist in the local fallback store, an embedded data URI.
    """
    id: str
    image_ref: str
    timestamp: datetime
    detections: Tuple[EquipmentId, ...] = ()
    confidence: float = 0.0
    protected: bool = False
    sync_state: SyncState = SyncState.CAPTURED
    user_id: str = ""

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.id:
            raise ValueError("Capture ID is required")
        self.detections = tuple(self.detections)
        self.confidence = max(0.0, min(1.0, float(self.confidence)))

    @property
    def is_embedded(self) -> bool:
        return self.image_ref.startswith("data:")

    def transition(self, target: SyncState) -> "CapturedImage":
        """Return a copy moved to target, refusing transitions the lifecycle forbids."""
        if not can_transition(self.sync_state, target):
            raise InvalidSyncTransitionError(
                f"Capture {self.id} cannot move from {self.sync_state.value} to {target.value}",
                details={"capture_id": self.id},
            )
        return replace(self, sync_state=target)


@dataclass
class PersistOutcome:
    """What happened to one capture handed to the persistence path."""
    capture_id: str
    state: SyncState
    image_ref: str
    confidence: float
    warning: str = ""

    @property
    def synced(self) -> bool:
        return self.state is SyncState.SYNCED


@dataclass
class MigrationReport:
    """Counters for one reconciliation pass over the local fallback store."""
    scanned: int = 0
    migrated: int = 0
    skipped: int = 0
    failed: int = 0
    failed_ids: list = field(default_factory=list)
