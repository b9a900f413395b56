from .auth_dto import GalleryLoginRequest, TokenResponse
from .analysis_dto import AnalyzeFrameRequest, AnalysisResponse, AlertResponse, UploadAnalysisResponse
from .capture_dto import (
    CaptureRequest,
    CaptureQueuedResponse,
    CapturedImageResponse,
    CaptureListResponse,
    PersistOutcomeResponse,
    DeleteCapturesRequest,
    DeleteCapturesResponse,
    MigrationResponse,
)

__all__ = [
    "GalleryLoginRequest",
    "TokenResponse",
    "AnalyzeFrameRequest",
    "AnalysisResponse",
    "AlertResponse",
    "UploadAnalysisResponse",
    "CaptureRequest",
    "CaptureQueuedResponse",
    "CapturedImageResponse",
    "CaptureListResponse",
    "PersistOutcomeResponse",
    "DeleteCapturesRequest",
    "DeleteCapturesResponse",
    "MigrationResponse",
]
