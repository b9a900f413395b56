"""Local Capture Store

Degraded-mode mirror of capture metadata kept in a single JSON file under
one namespaced key. Every mutation reads the whole list and rewrites the
whole file.
"""

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ...core.config import get_settings
from ...domain.constants import LocalCaptureFields
from ...domain.models.captured_image import CapturedImage, SyncState
from ...domain.models.equipment import parse_equipment_set, sort_equipment
from ...domain.repositories.local_capture_store import LocalCaptureStore
from ...exceptions import TransportFailure

logger = logging.getLogger(__name__)

STORE_KEY = "ppe_monitor.captured_images"


def image_to_record(image: CapturedImage) -> Dict[str, Any]:
    return {
        LocalCaptureFields.ID: image.id,
        LocalCaptureFields.URL: image.image_ref,
        LocalCaptureFields.TIMESTAMP: image.timestamp.isoformat(),
        LocalCaptureFields.DETECTIONS: [item.value for item in image.detections],
        LocalCaptureFields.CONFIDENCE: image.confidence,
        LocalCaptureFields.IS_PROTECTED: image.protected,
        LocalCaptureFields.SYNC_STATE: image.sync_state.value,
    }


def record_to_image(record: Dict[str, Any]) -> CapturedImage:
    raw_ts = record.get(LocalCaptureFields.TIMESTAMP)
    try:
        timestamp = datetime.fromisoformat(str(raw_ts).replace("Z", "+00:00"))
    except ValueError:
        timestamp = datetime.now(timezone.utc)
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    try:
        state = SyncState(record.get(LocalCaptureFields.SYNC_STATE) or SyncState.LOCAL_ONLY.value)
    except ValueError:
        state = SyncState.LOCAL_ONLY
    return CapturedImage(
        id=str(record[LocalCaptureFields.ID]),
        image_ref=record.get(LocalCaptureFields.URL) or "",
        timestamp=timestamp,
        detections=tuple(sort_equipment(parse_equipment_set(record.get(LocalCaptureFields.DETECTIONS) or []))),
        confidence=float(record.get(LocalCaptureFields.CONFIDENCE) or 0.0),
        protected=bool(record.get(LocalCaptureFields.IS_PROTECTED)),
        sync_state=state,
    )


class JsonLocalCaptureStore(LocalCaptureStore):
    """
    File-backed LocalCaptureStore

    Reads of an unreadable file come back empty, but mutations refuse to
    overwrite it: the records may hold the only copy of their images.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else Path(get_settings().local_store_path)

    def _read_records(self) -> List[Dict[str, Any]]:
        """
        Raises:
            TransportFailure: If the file exists but cannot be read as a store
        """
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = json.load(f)
        except (OSError, ValueError) as e:
            raise TransportFailure(f"Local capture store {self.path} is unreadable: {e}", service_name="LocalStore") from e
        if not isinstance(content, dict) or not isinstance(content.get(STORE_KEY, []), list):
            raise TransportFailure(f"Local capture store {self.path} has an unexpected layout", service_name="LocalStore")
        return [r for r in content.get(STORE_KEY, []) if isinstance(r, dict) and r.get(LocalCaptureFields.ID)]

    def _write_records(self, records: List[Dict[str, Any]]) -> None:
        """Write to a sibling temp file, then swap it in so a crash never leaves a truncated store"""
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({STORE_KEY: records}, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise TransportFailure(f"Writing local capture store failed: {e}", service_name="LocalStore") from e

    def load_all(self) -> List[CapturedImage]:
        try:
            records = self._read_records()
        except TransportFailure as e:
            logger.error(e.message)
            return []
        return [record_to_image(record) for record in records]

    def append(self, image: CapturedImage) -> None:
        records = self._read_records()
        records.append(image_to_record(image))
        self._write_records(records)
        logger.info(f"Saved capture {image.id} to local store ({len(records)} records)")

    def replace_all(self, images: Sequence[CapturedImage]) -> None:
        # An unreadable file is never replaced wholesale
        self._read_records()
        self._write_records([image_to_record(image) for image in images])

    def remove(self, image_ids: Sequence[str]) -> int:
        wanted = set(image_ids)
        records = self._read_records()
        kept = [r for r in records if str(r.get(LocalCaptureFields.ID)) not in wanted]
        removed = len(records) - len(kept)
        if removed:
            self._write_records(kept)
        return removed
