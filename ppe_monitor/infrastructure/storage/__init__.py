from .gridfs_object_store import GridFSObjectStore
from .json_local_capture_store import JsonLocalCaptureStore

__all__ = ["GridFSObjectStore", "JsonLocalCaptureStore"]
