"""Shared test fixtures."""

from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskkeeper.config import Settings
from taskkeeper.db import TaskStore
from taskkeeper.main import create_app
from taskkeeper.services import TaskService

from .fakes import InMemoryTaskStore

FIXED_NOW = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(database_path=tmp_path / "tasks.db")


@pytest.fixture()
def memory_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture()
def service(memory_store: InMemoryTaskStore) -> TaskService:
    """Service over the in-memory store with a fixed clock."""
    return TaskService(memory_store, clock=lambda: FIXED_NOW)


@pytest.fixture()
def sqlite_store(settings: Settings) -> TaskStore:
    store = TaskStore(settings.database_path)
    store.init_db()
    return store


@pytest.fixture()
def client(settings: Settings):
    """TestClient over a real SQLite database in tmp_path."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
