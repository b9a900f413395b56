# Standard library imports
from typing import Optional

# External package imports
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
    AsyncIOMotorGridFSBucket,
)

# Local application imports
from ...core.config import get_settings


# Global MongoDB connection instances (singleton pattern)
_mongo_client: Optional[AsyncIOMotorClient] = None
_mongo_database: Optional[AsyncIOMotorDatabase] = None


def get_database() -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance (singleton pattern)

    Returns:
        MongoDB database instance
    """
    global _mongo_client, _mongo_database

    if _mongo_database is not None:
        return _mongo_database

    settings = get_settings()
    _mongo_client = AsyncIOMotorClient(settings.mongo_uri, serverSelectionTimeoutMS=5000)
    _mongo_database = _mongo_client[settings.mongo_database_name]
    return _mongo_database


def get_captured_image_collection() -> AsyncIOMotorCollection:
    """
    Get captured images collection from MongoDB

    Returns:
        MongoDB collection for capture metadata rows
    """
    return get_database()[get_settings().captures_collection_name]


def get_images_bucket() -> AsyncIOMotorGridFSBucket:
    """
    Get the GridFS bucket holding captured image bytes

    Returns:
        GridFS bucket for image objects
    """
    return AsyncIOMotorGridFSBucket(get_database(), bucket_name=get_settings().images_bucket_name)


def close_database() -> None:
    """Close the MongoDB client (call on application shutdown)."""
    global _mongo_client, _mongo_database
    if _mongo_client is not None:
        _mongo_client.close()
    _mongo_client = None
    _mongo_database = None
