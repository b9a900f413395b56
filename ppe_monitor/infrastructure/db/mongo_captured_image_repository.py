# Standard library imports
from datetime import datetime, timezone
from typing import List, Optional, Sequence

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.repositories.captured_image_repository import CapturedImageRepository
from ...domain.models.captured_image import CapturedImage, SyncState
from ...domain.models.equipment import parse_equipment_set, sort_equipment
from ...domain.constants import CapturedImageFields
from ...exceptions import TransportFailure
from .mongo_connection import get_captured_image_collection


class MongoCapturedImageRepository(CapturedImageRepository):
    """MongoDB implementation of CapturedImageRepository"""

    def __init__(self, collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.collection = collection if collection is not None else get_captured_image_collection()

    async def insert(self, image: CapturedImage) -> str:
        if not image:
            raise ValueError("Captured image cannot be None")

        doc = {
            CapturedImageFields.MONGO_ID: image.id,
            CapturedImageFields.URL: image.image_ref,
            CapturedImageFields.DETECTIONS: [item.value for item in image.detections],
            CapturedImageFields.CONFIDENCE: image.confidence,
            CapturedImageFields.CREATED_AT: image.timestamp,
            CapturedImageFields.IS_PROTECTED: image.protected,
            CapturedImageFields.USER_ID: image.user_id or None,
        }
        try:
            await self.collection.insert_one(doc)
        except PyMongoError as e:
            raise TransportFailure(f"Insert of capture {image.id} failed: {e}", service_name="MongoDB") from e
        return image.id

    async def exists(self, image_id: str) -> bool:
        if not image_id:
            return False
        try:
            doc = await self.collection.find_one(
                {CapturedImageFields.MONGO_ID: image_id},
                projection={CapturedImageFields.MONGO_ID: 1},
            )
        except PyMongoError as e:
            raise TransportFailure(f"Lookup of capture {image_id} failed: {e}", service_name="MongoDB") from e
        return doc is not None

    async def get_by_id(self, image_id: str) -> Optional[CapturedImage]:
        if not image_id:
            return None
        try:
            doc = await self.collection.find_one({CapturedImageFields.MONGO_ID: image_id})
        except PyMongoError as e:
            raise TransportFailure(f"Lookup of capture {image_id} failed: {e}", service_name="MongoDB") from e
        return self._document_to_image(doc) if doc else None

    async def list_recent(self, limit: int) -> List[CapturedImage]:
        cursor = (
            self.collection.find({})
            .sort([(CapturedImageFields.CREATED_AT, -1)])
            .limit(max(1, int(limit)))
        )
        items: List[CapturedImage] = []
        try:
            async for doc in cursor:
                items.append(self._document_to_image(doc))
        except PyMongoError as e:
            raise TransportFailure(f"Listing captures failed: {e}", service_name="MongoDB") from e
        return items

    async def delete(self, image_id: str) -> bool:
        try:
            result = await self.collection.delete_one({CapturedImageFields.MONGO_ID: image_id})
        except PyMongoError as e:
            raise TransportFailure(f"Delete of capture {image_id} failed: {e}", service_name="MongoDB") from e
        return result.deleted_count > 0

    async def delete_many(self, image_ids: Sequence[str]) -> int:
        if not image_ids:
            return 0
        try:
            result = await self.collection.delete_many({CapturedImageFields.MONGO_ID: {"$in": list(image_ids)}})
        except PyMongoError as e:
            raise TransportFailure(f"Bulk delete of captures failed: {e}", service_name="MongoDB") from e
        return result.deleted_count

    def _document_to_image(self, doc: dict) -> CapturedImage:
        created_at = doc.get(CapturedImageFields.CREATED_AT) or datetime.now(timezone.utc)
        if created_at.tzinfo is None:
            # Mongo returns naive UTC datetimes
            created_at = created_at.replace(tzinfo=timezone.utc)
        return CapturedImage(
            id=str(doc.get(CapturedImageFields.MONGO_ID)),
            image_ref=doc.get(CapturedImageFields.URL) or "",
            timestamp=created_at,
            detections=tuple(sort_equipment(parse_equipment_set(doc.get(CapturedImageFields.DETECTIONS) or []))),
            confidence=float(doc.get(CapturedImageFields.CONFIDENCE) or 0.0),
            protected=bool(doc.get(CapturedImageFields.IS_PROTECTED)),
            sync_state=SyncState.SYNCED,
            user_id=doc.get(CapturedImageFields.USER_ID) or "",
        )
