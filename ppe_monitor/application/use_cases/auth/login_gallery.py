# Standard library imports
import logging
from typing import Optional

# Local application imports
from ....core.security import issue_gallery_token, verify_password
from ...dto.auth_dto import GalleryLoginRequest, TokenResponse

logger = logging.getLogger(__name__)


class GalleryLoginUseCase:
    """Exchange the gallery password for a gallery-scoped bearer token"""

    def __init__(self, password_hash: str) -> None:
        self.password_hash = password_hash
        if not password_hash:
            logger.warning("GALLERY_PASSWORD_HASH is not set; gallery login is disabled")

    async def execute(self, request: GalleryLoginRequest) -> Optional[TokenResponse]:
        """
        Returns:
            TokenResponse, or None when the password does not match
        """
        if not verify_password(request.password, self.password_hash):
            logger.warning("Rejected gallery login attempt")
            return None

        token, lifetime = issue_gallery_token()
        return TokenResponse(access_token=token, expires_in=lifetime)
