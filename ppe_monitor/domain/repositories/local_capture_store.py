from abc import ABC, abstractmethod
from typing import List, Sequence

from ..models.captured_image import CapturedImage


class LocalCaptureStore(ABC):
    """
    Degraded-mode mirror of the capture metadata.

    A single append-only list; every mutation reads the whole list and
    rewrites it.
    """

    @abstractmethod
    def load_all(self) -> List[CapturedImage]:
        pass

    @abstractmethod
    def append(self, image: CapturedImage) -> None:
        pass

    @abstractmethod
    def replace_all(self, images: Sequence[CapturedImage]) -> None:
        pass

    @abstractmethod
    def remove(self, image_ids: Sequence[str]) -> int:
        """Drop records by id, returning how many were removed"""
        pass
