"""GridFS-backed object store for captured image bytes."""
import logging
from typing import Optional, Sequence, Tuple
from urllib.parse import quote

from gridfs.errors import NoFile
from motor.motor_asyncio import AsyncIOMotorGridFSBucket
from pymongo.errors import PyMongoError

from ...core.config import get_settings
from ...domain.repositories.object_store import ObjectStore
from ...exceptions import TransportFailure
from ..db.mongo_connection import get_images_bucket

logger = logging.getLogger(__name__)

OBJECTS_ROUTE = "/api/v1/captures/objects"


class GridFSObjectStore(ObjectStore):
    """
    Stores image objects in a GridFS bucket.

    Public URLs point at the captures controller, which streams the object
    back out of the bucket.
    """

    def __init__(
        self,
        bucket: Optional[AsyncIOMotorGridFSBucket] = None,
        public_base_url: Optional[str] = None,
    ) -> None:
        self.bucket = bucket if bucket is not None else get_images_bucket()
        self.public_base_url = (public_base_url or get_settings().public_base_url).rstrip("/")

    async def upload(self, name: str, data: bytes, content_type: str) -> str:
        if not name:
            raise ValueError("Object name is required")
        try:
            file_id = await self.bucket.upload_from_stream(
                name,
                data,
                metadata={"content_type": content_type},
            )
        except PyMongoError as e:
            raise TransportFailure(f"Upload of {name} failed: {e}", service_name="GridFS") from e
        logger.debug(f"Uploaded object {name} ({len(data)} bytes)")
        return str(file_id)

    def public_url(self, name: str) -> str:
        return f"{self.public_base_url}{OBJECTS_ROUTE}/{quote(name)}"

    async def remove(self, names: Sequence[str]) -> None:
        if not names:
            return
        try:
            cursor = self.bucket.find({"filename": {"$in": list(names)}})
            async for grid_out in cursor:
                try:
                    await self.bucket.delete(grid_out._id)
                except NoFile:
                    logger.debug(f"Object {grid_out.filename} vanished during removal")
        except PyMongoError as e:
            raise TransportFailure(f"Removing objects failed: {e}", service_name="GridFS") from e

    async def download(self, name: str) -> Optional[Tuple[bytes, str]]:
        try:
            grid_out = await self.bucket.open_download_stream_by_name(name)
            data = await grid_out.read()
        except NoFile:
            return None
        except PyMongoError as e:
            raise TransportFailure(f"Download of {name} failed: {e}", service_name="GridFS") from e
        metadata = grid_out.metadata or {}
        return data, metadata.get("content_type", "image/jpeg")
