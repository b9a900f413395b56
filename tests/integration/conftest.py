"""
Fixtures for API integration tests: TestClient with a mocked DI container (no DB, no gateway).
"""
from contextlib import ExitStack
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from ppe_monitor.core.security import issue_gallery_token
from ppe_monitor.processing.capture_worker import CapturePersistWorker

CONTROLLER_MODULES = (
    "ppe_monitor.api.v1.auth_controller",
    "ppe_monitor.api.v1.analysis_controller",
    "ppe_monitor.api.v1.captures_controller",
    "ppe_monitor.main",
)


@pytest.fixture
def mock_worker():
    worker = MagicMock(spec=CapturePersistWorker)
    worker.stop = AsyncMock()
    worker.submit.return_value = "cap-queued"
    return worker


@pytest.fixture
def registry(mock_worker):
    """Dependencies the mocked container hands out; tests add their use cases here."""
    return {CapturePersistWorker: mock_worker}


@pytest.fixture
def mock_container(registry):
    container = MagicMock()
    container.get.side_effect = lambda key: registry.get(key)
    return container


@pytest.fixture
def client(mock_container):
    """Create test client with mocked container."""
    from ppe_monitor.main import app

    with ExitStack() as stack:
        for module in CONTROLLER_MODULES:
            stack.enter_context(patch(f"{module}.get_container", return_value=mock_container))
        stack.enter_context(patch("ppe_monitor.main.build_camera_loop", return_value=None))
        with TestClient(app) as c:
            yield c


@pytest.fixture
def auth_headers():
    token, _ = issue_gallery_token()
    return {"Authorization": f"Bearer {token}"}
