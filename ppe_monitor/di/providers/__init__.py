from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .analysis_provider import AnalysisProvider
from .capture_provider import CaptureProvider
from .auth_provider import AuthProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "AnalysisProvider",
    "CaptureProvider",
    "AuthProvider",
]
