"""
Integration tests for auth API endpoints.
Uses TestClient with mocked use cases (no real DB).
"""
from unittest.mock import AsyncMock

import pytest

pytestmark = pytest.mark.integration

from ppe_monitor.application.dto.auth_dto import TokenResponse
from ppe_monitor.application.use_cases.auth.login_gallery import GalleryLoginUseCase


@pytest.fixture
def mock_login_use_case(registry):
    uc = AsyncMock(spec=GalleryLoginUseCase)
    registry[GalleryLoginUseCase] = uc
    return uc


class TestAuthAPI:
    """Tests for /api/v1/auth endpoints"""

    def test_login_success(self, client, mock_login_use_case):
        mock_login_use_case.execute.return_value = TokenResponse(access_token="jwt.token.here", expires_in=3600)
        response = client.post("/api/v1/auth/login", json={"password": "galeria"})
        assert response.status_code == 200
        assert response.json() == {"access_token": "jwt.token.here", "token_type": "bearer", "expires_in": 3600}

    def test_login_wrong_password_returns_401(self, client, mock_login_use_case):
        mock_login_use_case.execute.return_value = None
        response = client.post("/api/v1/auth/login", json={"password": "wrong"})
        assert response.status_code == 401

    def test_login_empty_password_is_rejected(self, client, mock_login_use_case):
        response = client.post("/api/v1/auth/login", json={"password": ""})
        assert response.status_code == 422
        mock_login_use_case.execute.assert_not_awaited()

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
