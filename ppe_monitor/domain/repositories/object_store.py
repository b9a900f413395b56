from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple


class ObjectStore(ABC):
    """Repository interface - binary image objects addressed by name"""

    @abstractmethod
    async def upload(self, name: str, data: bytes, content_type: str) -> str:
        """Store data under name and return the stored object reference"""
        pass

    @abstractmethod
    def public_url(self, name: str) -> str:
        """Public address clients use to fetch the object"""
        pass

    @abstractmethod
    async def remove(self, names: Sequence[str]) -> None:
        """Delete every object in names; missing names are ignored"""
        pass

    @abstractmethod
    async def download(self, name: str) -> Optional[Tuple[bytes, str]]:
        """Return (data, content_type) or None when the object does not exist"""
        pass
