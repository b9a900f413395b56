"""
Shared pytest fixtures for PPE monitor tests.
"""
import os
from unittest.mock import MagicMock, patch

import pytest

from tests.helpers import InMemoryLocalCaptureStore, make_image_bytes


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGO_URI": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_ppe_db",
        "JWT_SECRET_KEY": "test_secret_key_for_testing_only",
        "VISION_API_KEY": "test_vision_key_placeholder",
        "CAMERA_SOURCE": "",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_settings():
    """Fixture to mock get_settings for tests. Patches all modules that use it."""
    mock = MagicMock()
    mock.mongo_uri = "mongodb://localhost:27017"
    mock.mongo_database_name = "test_db"
    mock.jwt_secret_key = "test_jwt_secret"
    mock.jwt_algorithm = "HS256"
    mock.access_token_expire_minutes = 60
    mock.vision_api_url = "https://gateway.test/v1/chat/completions"
    mock.vision_api_key = "test_vision_key"
    mock.vision_model = "test-model"
    mock.vision_timeout_seconds = 5.0
    mock.detection_prompt = "Analiza esta imagen"
    mock.public_base_url = "http://testserver"
    mock.max_upload_mb = 1

    # Patch at source and at use sites (modules import get_settings at load time)
    with patch("ppe_monitor.core.config.get_settings", return_value=mock), patch(
        "ppe_monitor.core.security.get_settings", return_value=mock
    ), patch("ppe_monitor.infrastructure.external.vision_gateway_client.get_settings", return_value=mock):
        yield mock


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes("JPEG")


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def local_store() -> InMemoryLocalCaptureStore:
    return InMemoryLocalCaptureStore()
