"""
Builders and fakes shared by the test modules.
"""
from io import BytesIO
from typing import List, Sequence

from PIL import Image

from ppe_monitor.domain.models.captured_image import CapturedImage
from ppe_monitor.domain.models.detection import AnalysisResult, DetectionItem, PersonDetection
from ppe_monitor.domain.repositories.local_capture_store import LocalCaptureStore


def make_image_bytes(fmt: str = "JPEG", size=(8, 8)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color=(200, 120, 40)).save(buffer, format=fmt)
    return buffer.getvalue()


def make_result(*equipment, confidence: float = 0.9, description: str = "") -> AnalysisResult:
    """One person wearing the given equipment; no equipment means an empty frame."""
    if not equipment:
        return AnalysisResult(persons=(), person_count=0, overall_confidence=confidence, description=description)
    person = PersonDetection(
        id=1,
        items=frozenset(DetectionItem(type=item, confidence=confidence) for item in equipment),
    )
    return AnalysisResult(persons=(person,), person_count=1, overall_confidence=confidence, description=description)


class InMemoryLocalCaptureStore(LocalCaptureStore):
    """LocalCaptureStore kept in a list, for use case tests."""

    def __init__(self, images: Sequence[CapturedImage] = ()) -> None:
        self.images: List[CapturedImage] = list(images)
        self.replace_calls = 0

    def load_all(self) -> List[CapturedImage]:
        return list(self.images)

    def append(self, image: CapturedImage) -> None:
        self.images.append(image)

    def replace_all(self, images: Sequence[CapturedImage]) -> None:
        self.replace_calls += 1
        self.images = list(images)

    def remove(self, image_ids: Sequence[str]) -> int:
        wanted = set(image_ids)
        before = len(self.images)
        self.images = [image for image in self.images if image.id not in wanted]
        return before - len(self.images)
