"""User-facing alerts derived from an analysis result."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from ..domain.models.detection import AnalysisResult
from ..domain.models.equipment import EquipmentId, sort_equipment


class AlertLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class DetectionAlert:
    """Notification text for the operator (toast and spoken announcement)."""

    level: AlertLevel
    title: str
    message: str
    detected: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


def should_capture(result: AnalysisResult) -> bool:
    """A frame is kept when a person wearing at least one item is in view."""
    return result.has_person and bool(result.detected_equipment())


def build_alert(result: AnalysisResult, required: Iterable[EquipmentId]) -> Optional[DetectionAlert]:
    """Return the alert for a frame, or None when nobody is in view."""
    if not result.has_person:
        return None

    detected = [item.value for item in sort_equipment(result.detected_equipment())]
    missing = [item.value for item in result.missing_equipment(required)]

    if not detected:
        return DetectionAlert(
            level=AlertLevel.WARNING,
            title="No PPE",
            message="Person detected without protective equipment",
            missing=missing,
        )

    message = f"Person detected wearing: {', '.join(detected)}"
    if missing:
        message += f". Missing: {', '.join(missing)}"
    return DetectionAlert(
        level=AlertLevel.WARNING if missing else AlertLevel.INFO,
        title="PPE detected",
        message=message,
        detected=detected,
        missing=missing,
    )
