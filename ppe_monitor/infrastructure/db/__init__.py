from .mongo_connection import get_database, get_captured_image_collection, get_images_bucket
from .mongo_captured_image_repository import MongoCapturedImageRepository

__all__ = [
    "get_database",
    "get_captured_image_collection",
    "get_images_bucket",
    "MongoCapturedImageRepository",
]
