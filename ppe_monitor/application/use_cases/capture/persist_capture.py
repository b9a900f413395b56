# Standard library imports
import logging
import secrets
import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import FrozenSet, Optional

# Local application imports
from ....detection.confidence import CONFIDENCE_FLOOR, estimate_confidence
from ....domain.models.captured_image import CapturedImage, PersistOutcome, SyncState
from ....domain.models.detection import AnalysisResult
from ....domain.models.equipment import DEFAULT_REQUIRED_EQUIPMENT, EquipmentId, sort_equipment
from ....domain.repositories.captured_image_repository import CapturedImageRepository
from ....domain.repositories.local_capture_store import LocalCaptureStore
from ....domain.repositories.object_store import ObjectStore
from ....exceptions import ValidationFailure, get_user_message
from ....infrastructure.media.image_utils import extension_for, sniff_image, to_data_uri

logger = logging.getLogger(__name__)


def generate_capture_id() -> str:
    """
    Generate a unique capture ID

    Returns:
        Millisecond timestamp plus a random suffix, e.g. 1718000000000-3fa9c2d1
    """
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"


class PersistCaptureUseCase:
    """
    Use case for storing a captured frame with its detections.

    Primary path uploads the bytes to the object store and inserts the
    metadata row. Any failure there falls back to the local store with the
    image embedded as a data URI. Never raises.
    """

    def __init__(
        self,
        object_store: ObjectStore,
        capture_repository: CapturedImageRepository,
        local_store: LocalCaptureStore,
        required_equipment: FrozenSet[EquipmentId] = DEFAULT_REQUIRED_EQUIPMENT,
        confidence_floor: float = CONFIDENCE_FLOOR,
    ) -> None:
        self.object_store = object_store
        self.capture_repository = capture_repository
        self.local_store = local_store
        self.required_equipment = frozenset(required_equipment)
        self.confidence_floor = confidence_floor

    async def execute(
        self,
        image: bytes,
        analysis: AnalysisResult,
        capture_id: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> PersistOutcome:
        """
        Persist one capture

        Args:
            image: Encoded image bytes
            analysis: Normalized analysis of the frame
            capture_id: Optional id chosen by the caller (defaults to a generated one)
            content_type: Optional content type; sniffed from the bytes when omitted

        Returns:
            PersistOutcome with SYNCED or LOCAL_ONLY state
        """
        detections = tuple(sort_equipment(analysis.detected_equipment()))
        capture = CapturedImage(
            id=capture_id or generate_capture_id(),
            image_ref="",
            timestamp=datetime.now(timezone.utc),
            detections=detections,
            confidence=estimate_confidence(detections, self.required_equipment, self.confidence_floor),
        ).transition(SyncState.UPLOAD_PENDING)
        content_type = content_type or self._guess_content_type(image)

        object_name = f"ppe_{capture.id}.{extension_for(content_type)}"
        try:
            await self.object_store.upload(object_name, image, content_type)
            synced = replace(capture, image_ref=self.object_store.public_url(object_name))
            synced = synced.transition(SyncState.SYNCED)
        except Exception as e:
            logger.warning(f"Upload of capture {capture.id} failed, falling back to local store: {e}", exc_info=True)
            return self._persist_locally(capture, image, content_type, e)

        try:
            await self.capture_repository.insert(synced)
        except Exception as e:
            logger.warning(f"Metadata insert of capture {capture.id} failed, falling back to local store: {e}", exc_info=True)
            await self._discard_object(object_name)
            return self._persist_locally(capture, image, content_type, e)

        logger.info(f"Capture {capture.id} saved and synced")
        return PersistOutcome(
            capture_id=synced.id,
            state=synced.sync_state,
            image_ref=synced.image_ref,
            confidence=synced.confidence,
        )

    def _persist_locally(
        self,
        capture: CapturedImage,
        image: bytes,
        content_type: str,
        cause: Exception,
    ) -> PersistOutcome:
        local = replace(capture, image_ref=to_data_uri(image, content_type)).transition(SyncState.LOCAL_ONLY)
        try:
            self.local_store.append(local)
        except Exception as e:
            logger.error(f"Local save of capture {capture.id} failed: {e}", exc_info=True)
            return PersistOutcome(
                capture_id=capture.id,
                state=capture.sync_state,
                image_ref="",
                confidence=capture.confidence,
                warning="Capture could not be stored",
            )
        return PersistOutcome(
            capture_id=local.id,
            state=local.sync_state,
            image_ref=local.image_ref,
            confidence=local.confidence,
            warning=get_user_message(cause),
        )

    async def _discard_object(self, object_name: str) -> None:
        """Best-effort removal of an uploaded object whose metadata row was never written"""
        try:
            await self.object_store.remove([object_name])
        except Exception as e:
            logger.warning(f"Could not remove orphaned object {object_name}: {e}")

    @staticmethod
    def _guess_content_type(image: bytes) -> str:
        try:
            return sniff_image(image)
        except ValidationFailure:
            logger.warning("Capture bytes are not a recognizable image, storing as JPEG")
            return "image/jpeg"
