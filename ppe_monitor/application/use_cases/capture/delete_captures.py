# Standard library imports
import logging
from typing import List, Sequence, Set

# Local application imports
from ....domain.repositories.captured_image_repository import CapturedImageRepository
from ....domain.repositories.local_capture_store import LocalCaptureStore
from ....domain.repositories.object_store import ObjectStore
from ....exceptions import TransportFailure, get_user_message
from ....infrastructure.media.image_utils import object_name_from_url
from ...dto.capture_dto import DeleteCapturesResponse

logger = logging.getLogger(__name__)


class DeleteCapturesUseCase:
    """Use case for deleting captures from the object store, the metadata store and the local store"""

    def __init__(
        self,
        object_store: ObjectStore,
        capture_repository: CapturedImageRepository,
        local_store: LocalCaptureStore,
    ) -> None:
        self.object_store = object_store
        self.capture_repository = capture_repository
        self.local_store = local_store

    async def execute(self, image_ids: Sequence[str]) -> DeleteCapturesResponse:
        """
        Delete captures by id

        Local records are always removed. If the remote stores fail the
        response carries a warning and only counts what was removed.
        """
        ids = list(dict.fromkeys(image_id for image_id in image_ids if image_id))
        if not ids:
            return DeleteCapturesResponse(deleted=0)

        local_ids = {record.id for record in self.local_store.load_all()} & set(ids)
        if local_ids:
            self.local_store.remove(list(local_ids))

        remote_ids: Set[str] = set()
        warning = None
        try:
            remote_ids = await self._delete_remote(ids)
        except TransportFailure as e:
            logger.error(f"Remote delete of {len(ids)} capture(s) failed: {e}")
            warning = get_user_message(e)

        deleted = len(local_ids | remote_ids)
        logger.info(f"Deleted {deleted} capture(s)")
        return DeleteCapturesResponse(deleted=deleted, warning=warning)

    async def _delete_remote(self, ids: List[str]) -> Set[str]:
        found: Set[str] = set()
        object_names: List[str] = []
        for image_id in ids:
            image = await self.capture_repository.get_by_id(image_id)
            if image is None:
                continue
            found.add(image_id)
            name = object_name_from_url(image.image_ref)
            if name:
                object_names.append(name)

        if not found:
            return found
        if object_names:
            await self.object_store.remove(object_names)
        await self.capture_repository.delete_many(list(found))
        return found
