from .equipment import EquipmentId, DEFAULT_REQUIRED_EQUIPMENT
from .detection import AnalysisResult, DetectionItem, MalformedResponse, PersonDetection, ResponseFormat
from .captured_image import CapturedImage, MigrationReport, PersistOutcome, SyncState

__all__ = [
    "EquipmentId",
    "DEFAULT_REQUIRED_EQUIPMENT",
    "AnalysisResult",
    "DetectionItem",
    "MalformedResponse",
    "PersonDetection",
    "ResponseFormat",
    "CapturedImage",
    "MigrationReport",
    "PersistOutcome",
    "SyncState",
]
