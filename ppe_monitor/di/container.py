# Standard library imports
from typing import Optional

# Local application imports
from .base_container import BaseContainer
from .providers import (
    AnalysisProvider,
    AuthProvider,
    CaptureProvider,
    DatabaseProvider,
    RepositoryProvider,
)


class DIContainer(BaseContainer):
    """
    Application container for the PPE monitor.

    Providers register in dependency order: Mongo handles first, then the
    three stores (metadata, GridFS objects, local fallback file), then the
    analysis, capture and auth use cases along with the persist worker.
    """

    def __init__(self) -> None:
        super().__init__()
        DatabaseProvider.register(self)
        RepositoryProvider.register(self)
        AnalysisProvider.register(self)
        CaptureProvider.register(self)
        AuthProvider.register(self)


_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Process-wide container, built on first use"""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Drop the global container so the next get_container() rebuilds it"""
    global _container
    _container = None
