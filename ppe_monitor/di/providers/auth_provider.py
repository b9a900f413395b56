from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...application.use_cases.auth.login_gallery import GalleryLoginUseCase

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class AuthProvider:
    """Authentication use case provider - gallery login"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        container.register_factory(
            GalleryLoginUseCase,
            lambda: GalleryLoginUseCase(
                password_hash=get_settings().gallery_password_hash
            )
        )
