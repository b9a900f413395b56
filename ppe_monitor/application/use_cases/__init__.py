from .analysis import AnalyzeFrameUseCase
from .auth import GalleryLoginUseCase
from .capture import (
    PersistCaptureUseCase,
    MigrateLocalCapturesUseCase,
    ListCapturesUseCase,
    DeleteCapturesUseCase,
)

__all__ = [
    "AnalyzeFrameUseCase",
    "GalleryLoginUseCase",
    "PersistCaptureUseCase",
    "MigrateLocalCapturesUseCase",
    "ListCapturesUseCase",
    "DeleteCapturesUseCase",
]
