"""
Unit tests for GalleryLoginUseCase.
"""
import pytest

from ppe_monitor.application.dto.auth_dto import GalleryLoginRequest
from ppe_monitor.application.use_cases.auth.login_gallery import GalleryLoginUseCase
from ppe_monitor.core.security import hash_password, verify_gallery_token


class TestGalleryLoginUseCase:
    """Tests for GalleryLoginUseCase"""

    @pytest.mark.asyncio
    async def test_correct_password_returns_token(self, mock_settings):
        use_case = GalleryLoginUseCase(password_hash=hash_password("galeria"))
        result = await use_case.execute(GalleryLoginRequest(password="galeria"))

        assert result is not None
        assert result.token_type == "bearer"
        assert result.expires_in == 3600
        assert verify_gallery_token(result.access_token)["scope"] == "gallery"

    @pytest.mark.asyncio
    async def test_wrong_password_returns_none(self, mock_settings):
        use_case = GalleryLoginUseCase(password_hash=hash_password("galeria"))
        assert await use_case.execute(GalleryLoginRequest(password="nope")) is None

    @pytest.mark.asyncio
    async def test_unconfigured_hash_rejects_everything(self, mock_settings):
        use_case = GalleryLoginUseCase(password_hash="")
        assert await use_case.execute(GalleryLoginRequest(password="anything")) is None
