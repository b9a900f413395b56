from .object_store import ObjectStore
from .captured_image_repository import CapturedImageRepository
from .local_capture_store import LocalCaptureStore

__all__ = ["ObjectStore", "CapturedImageRepository", "LocalCaptureStore"]
