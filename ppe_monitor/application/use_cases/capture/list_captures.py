# Standard library imports
import logging
from dataclasses import replace
from typing import FrozenSet

# Local application imports
from ....detection.confidence import CONFIDENCE_FLOOR, estimate_confidence
from ....domain.models.captured_image import CapturedImage, SyncState
from ....domain.models.equipment import DEFAULT_REQUIRED_EQUIPMENT, EquipmentId
from ....domain.repositories.captured_image_repository import CapturedImageRepository
from ....domain.repositories.local_capture_store import LocalCaptureStore
from ....exceptions import TransportFailure, get_user_message
from ...dto.capture_dto import CaptureListResponse, CapturedImageResponse

logger = logging.getLogger(__name__)


class ListCapturesUseCase:
    """Use case for the capture gallery: remote rows merged with unsynced local records"""

    def __init__(
        self,
        capture_repository: CapturedImageRepository,
        local_store: LocalCaptureStore,
        required_equipment: FrozenSet[EquipmentId] = DEFAULT_REQUIRED_EQUIPMENT,
        confidence_floor: float = CONFIDENCE_FLOOR,
    ) -> None:
        self.capture_repository = capture_repository
        self.local_store = local_store
        self.required_equipment = frozenset(required_equipment)
        self.confidence_floor = confidence_floor

    async def execute(self, limit: int = 100) -> CaptureListResponse:
        """
        List captures newest first

        When the metadata store is unreachable the whole local mirror is
        returned and the response is flagged as degraded.
        """
        local_records = self.local_store.load_all()

        try:
            remote = await self.capture_repository.list_recent(limit)
        except TransportFailure as e:
            logger.warning(f"Capture listing falling back to local store: {e}")
            images = local_records
            degraded, warning = True, get_user_message(e)
        else:
            remote_ids = {image.id for image in remote}
            pending = [
                record for record in local_records
                if record.sync_state is not SyncState.SYNCED and record.id not in remote_ids
            ]
            images = list(remote) + pending
            degraded, warning = False, None

        images = sorted(images, key=lambda image: image.timestamp, reverse=True)[:limit]
        items = [CapturedImageResponse.from_image(self._rescore(image)) for image in images]
        return CaptureListResponse(total=len(items), items=items, degraded=degraded, warning=warning)

    def _rescore(self, image: CapturedImage) -> CapturedImage:
        # Stored confidences may predate the current required set.
        confidence = estimate_confidence(image.detections, self.required_equipment, self.confidence_floor)
        return replace(image, confidence=confidence)
