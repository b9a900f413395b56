# Standard library imports
import logging
from dataclasses import replace
from typing import Dict

# Local application imports
from ....domain.models.captured_image import CapturedImage, MigrationReport, SyncState
from ....domain.repositories.captured_image_repository import CapturedImageRepository
from ....domain.repositories.local_capture_store import LocalCaptureStore
from ....domain.repositories.object_store import ObjectStore
from ....exceptions import TransportFailure
from ....infrastructure.media.image_utils import extension_for, parse_data_uri

logger = logging.getLogger(__name__)


class MigrateLocalCapturesUseCase:
    """
    Use case for reconciling the local fallback store with the remote stores.

    Records already present remotely are marked synced without a second
    insert, so running the migration twice inserts nothing the second time.
    A failing record is reported and left local; the rest still migrate.
    """

    def __init__(
        self,
        object_store: ObjectStore,
        capture_repository: CapturedImageRepository,
        local_store: LocalCaptureStore,
    ) -> None:
        self.object_store = object_store
        self.capture_repository = capture_repository
        self.local_store = local_store

    async def execute(self) -> MigrationReport:
        records = self.local_store.load_all()
        report = MigrationReport(scanned=len(records))
        updated: Dict[str, CapturedImage] = {}

        for record in records:
            if record.sync_state is SyncState.SYNCED:
                report.skipped += 1
                continue
            try:
                if await self.capture_repository.exists(record.id):
                    logger.info(f"Capture {record.id} already stored remotely, marking synced")
                    updated[record.id] = record.transition(SyncState.SYNCED)
                    report.skipped += 1
                    continue
                updated[record.id] = await self._migrate_one(record)
                report.migrated += 1
            except Exception as e:
                logger.error(f"Migration of capture {record.id} failed: {e}", exc_info=True)
                report.failed += 1
                report.failed_ids.append(record.id)

        if updated:
            self._write_back(updated)

        logger.info(
            f"Migration finished: scanned={report.scanned} migrated={report.migrated} "
            f"skipped={report.skipped} failed={report.failed}"
        )
        return report

    async def _migrate_one(self, record: CapturedImage) -> CapturedImage:
        image_ref = record.image_ref
        if record.is_embedded:
            data, content_type = parse_data_uri(record.image_ref)
            object_name = f"migrated_{record.id}.{extension_for(content_type)}"
            await self.object_store.upload(object_name, data, content_type)
            image_ref = self.object_store.public_url(object_name)

        migrated = replace(record, image_ref=image_ref).transition(SyncState.SYNCED)
        await self.capture_repository.insert(migrated)
        return migrated

    def _write_back(self, updated: Dict[str, CapturedImage]) -> None:
        # Re-read so captures appended or deleted while migrating are kept as they are now.
        current = self.local_store.load_all()
        merged = [updated.get(record.id, record) for record in current]
        try:
            self.local_store.replace_all(merged)
        except TransportFailure as e:
            logger.error(f"Could not write migration results to the local store: {e}")
