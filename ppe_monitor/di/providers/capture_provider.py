from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.captured_image_repository import CapturedImageRepository
from ...domain.repositories.local_capture_store import LocalCaptureStore
from ...domain.repositories.object_store import ObjectStore
from ...application.use_cases.capture.persist_capture import PersistCaptureUseCase
from ...application.use_cases.capture.migrate_captures import MigrateLocalCapturesUseCase
from ...application.use_cases.capture.list_captures import ListCapturesUseCase
from ...application.use_cases.capture.delete_captures import DeleteCapturesUseCase
from ...processing.capture_worker import CapturePersistWorker
from .analysis_provider import configured_required_equipment

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class CaptureProvider:
    """Capture use case provider - persistence, migration, gallery listing and deletion"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register capture use cases as factories and the persist worker as a
        singleton shared by the API and the analysis loop.
        """
        settings = get_settings()

        container.register_factory(
            PersistCaptureUseCase,
            lambda: PersistCaptureUseCase(
                object_store=container.get(ObjectStore),
                capture_repository=container.get(CapturedImageRepository),
                local_store=container.get(LocalCaptureStore),
                required_equipment=configured_required_equipment(),
                confidence_floor=settings.confidence_floor,
            )
        )

        container.register_singleton(
            CapturePersistWorker,
            CapturePersistWorker(
                persist_use_case=container.get(PersistCaptureUseCase),
                maxsize=settings.persist_queue_size,
            )
        )

        container.register_factory(
            MigrateLocalCapturesUseCase,
            lambda: MigrateLocalCapturesUseCase(
                object_store=container.get(ObjectStore),
                capture_repository=container.get(CapturedImageRepository),
                local_store=container.get(LocalCaptureStore),
            )
        )

        container.register_factory(
            ListCapturesUseCase,
            lambda: ListCapturesUseCase(
                capture_repository=container.get(CapturedImageRepository),
                local_store=container.get(LocalCaptureStore),
                required_equipment=configured_required_equipment(),
                confidence_floor=settings.confidence_floor,
            )
        )

        container.register_factory(
            DeleteCapturesUseCase,
            lambda: DeleteCapturesUseCase(
                object_store=container.get(ObjectStore),
                capture_repository=container.get(CapturedImageRepository),
                local_store=container.get(LocalCaptureStore),
            )
        )
