from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ...domain.models.captured_image import CapturedImage, MigrationReport, PersistOutcome


class CaptureRequest(BaseModel):
    """DTO for handing a frame and its analysis to the persistence worker"""
    image: str = Field(min_length=16, description="Image as a base64 data URI")
    analysis: Dict[str, Any] = Field(default_factory=dict, description="Canonical analysis JSON")


class CaptureQueuedResponse(BaseModel):
    capture_id: str
    status: str = "queued"


class CapturedImageResponse(BaseModel):
    id: str
    url: str
    timestamp: datetime
    detections: List[str] = Field(default_factory=list)
    confidence: float
    is_protected: bool = False
    sync_state: str

    @classmethod
    def from_image(cls, image: CapturedImage) -> "CapturedImageResponse":
        return cls(
            id=image.id,
            url=image.image_ref,
            timestamp=image.timestamp,
            detections=[item.value for item in image.detections],
            confidence=image.confidence,
            is_protected=image.protected,
            sync_state=image.sync_state.value,
        )


class CaptureListResponse(BaseModel):
    total: int = 0
    items: List[CapturedImageResponse] = Field(default_factory=list)
    degraded: bool = False
    warning: Optional[str] = None


class PersistOutcomeResponse(BaseModel):
    capture_id: str
    state: str
    url: str
    confidence: float
    warning: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: PersistOutcome) -> "PersistOutcomeResponse":
        return cls(
            capture_id=outcome.capture_id,
            state=outcome.state.value,
            url=outcome.image_ref,
            confidence=outcome.confidence,
            warning=outcome.warning or None,
        )


class DeleteCapturesRequest(BaseModel):
    ids: List[str] = Field(min_length=1, max_length=500)


class DeleteCapturesResponse(BaseModel):
    deleted: int = 0
    warning: Optional[str] = None


class MigrationResponse(BaseModel):
    scanned: int = 0
    migrated: int = 0
    skipped: int = 0
    failed: int = 0
    failed_ids: List[str] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: MigrationReport) -> "MigrationResponse":
        return cls(
            scanned=report.scanned,
            migrated=report.migrated,
            skipped=report.skipped,
            failed=report.failed,
            failed_ids=list(report.failed_ids),
        )
