from .persist_capture import PersistCaptureUseCase, generate_capture_id
from .migrate_captures import MigrateLocalCapturesUseCase
from .list_captures import ListCapturesUseCase
from .delete_captures import DeleteCapturesUseCase

__all__ = [
    "PersistCaptureUseCase",
    "MigrateLocalCapturesUseCase",
    "ListCapturesUseCase",
    "DeleteCapturesUseCase",
    "generate_capture_id",
]
