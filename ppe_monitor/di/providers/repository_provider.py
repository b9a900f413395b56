from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.captured_image_repository import CapturedImageRepository
from ...domain.repositories.local_capture_store import LocalCaptureStore
from ...domain.repositories.object_store import ObjectStore
from ...infrastructure.db.mongo_captured_image_repository import MongoCapturedImageRepository
from ...infrastructure.storage.gridfs_object_store import GridFSObjectStore
from ...infrastructure.storage.json_local_capture_store import JsonLocalCaptureStore

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()

        container.register_singleton(
            CapturedImageRepository,
            MongoCapturedImageRepository(collection=container.get("captured_image_collection"))
        )

        container.register_singleton(
            ObjectStore,
            GridFSObjectStore(
                bucket=container.get("images_bucket"),
                public_base_url=settings.public_base_url,
            )
        )

        container.register_singleton(
            LocalCaptureStore,
            JsonLocalCaptureStore(path=settings.local_store_path)
        )
