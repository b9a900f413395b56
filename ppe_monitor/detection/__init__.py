"""Pure detection logic: normalization, confidence scoring and alerts."""

from .alerts import AlertLevel, DetectionAlert, build_alert, should_capture
from .confidence import CONFIDENCE_FLOOR, estimate_confidence
from .normalizer import DEFAULT_MODEL_CONFIDENCE, normalize

__all__ = [
    "AlertLevel",
    "DetectionAlert",
    "build_alert",
    "should_capture",
    "CONFIDENCE_FLOOR",
    "estimate_confidence",
    "DEFAULT_MODEL_CONFIDENCE",
    "normalize",
]
