from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models.captured_image import CapturedImage


class CapturedImageRepository(ABC):
    """Repository interface - metadata rows for captured images"""

    @abstractmethod
    async def insert(self, image: CapturedImage) -> str:
        """Insert a metadata row and return its id"""
        pass

    @abstractmethod
    async def exists(self, image_id: str) -> bool:
        """Whether a row with this id is already stored"""
        pass

    @abstractmethod
    async def get_by_id(self, image_id: str) -> Optional[CapturedImage]:
        """Get a row by id"""
        pass

    @abstractmethod
    async def list_recent(self, limit: int) -> List[CapturedImage]:
        """Rows ordered by creation time, newest first"""
        pass

    @abstractmethod
    async def delete(self, image_id: str) -> bool:
        """Delete one row, returning whether it existed"""
        pass

    @abstractmethod
    async def delete_many(self, image_ids: Sequence[str]) -> int:
        """Delete rows by id, returning how many were removed"""
        pass
