"""
Unit tests for the dependency injection container.
"""
import pytest

from ppe_monitor.di.base_container import BaseContainer


class _Service:
    pass


class TestBaseContainer:
    """Tests for BaseContainer"""

    def test_singleton_returns_same_instance(self):
        container = BaseContainer()
        service = _Service()
        container.register_singleton(_Service, service)
        assert container.get(_Service) is service

    def test_factory_builds_new_instances(self):
        container = BaseContainer()
        container.register_factory(_Service, _Service)
        assert container.get(_Service) is not container.get(_Service)

    def test_string_keys(self):
        container = BaseContainer()
        container.register_singleton("database", "db")
        assert container.is_registered("database")
        assert container.get("database") == "db"

    def test_unregistered_raises_value_error(self):
        with pytest.raises(ValueError, match="_Service"):
            BaseContainer().get(_Service)


class TestDIContainer:
    """Wiring of the application container (motor connects lazily, so no MongoDB is needed)"""

    @pytest.fixture
    def container(self, tmp_path, monkeypatch):
        from ppe_monitor.core import config
        from ppe_monitor.di.container import get_container, reset_container
        from ppe_monitor.infrastructure.db.mongo_connection import close_database

        monkeypatch.setenv("LOCAL_STORE_PATH", str(tmp_path / "local.json"))
        monkeypatch.setattr(config, "_settings", None)
        reset_container()
        yield get_container()
        reset_container()
        close_database()

    @pytest.mark.asyncio
    async def test_resolves_every_use_case(self, container):
        from ppe_monitor.application.use_cases import (
            AnalyzeFrameUseCase,
            DeleteCapturesUseCase,
            GalleryLoginUseCase,
            ListCapturesUseCase,
            MigrateLocalCapturesUseCase,
            PersistCaptureUseCase,
        )
        from ppe_monitor.infrastructure.storage import JsonLocalCaptureStore

        for use_case in (
            AnalyzeFrameUseCase,
            PersistCaptureUseCase,
            MigrateLocalCapturesUseCase,
            ListCapturesUseCase,
            DeleteCapturesUseCase,
            GalleryLoginUseCase,
        ):
            assert isinstance(container.get(use_case), use_case)

        persist = container.get(PersistCaptureUseCase)
        assert isinstance(persist.local_store, JsonLocalCaptureStore)
        assert persist.local_store.path.name == "local.json"

    @pytest.mark.asyncio
    async def test_worker_is_a_singleton(self, container):
        from ppe_monitor.processing import CapturePersistWorker

        assert container.get(CapturePersistWorker) is container.get(CapturePersistWorker)

    @pytest.mark.asyncio
    async def test_get_container_is_cached_until_reset(self, container):
        from ppe_monitor.di.container import get_container, reset_container

        assert get_container() is container
        reset_container()
        assert get_container() is not container
