from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.location_tracker.location_tracker.container import build_container
from src.location_tracker.location_tracker.database.memory_record_store import InMemoryRecordStore
from src.location_tracker.location_tracker.main import create_app


@pytest.fixture
def fixed_now() -> datetime:
    """Local wall-clock instant used by attendance tests."""
    return datetime(2026, 2, 1, 8, 30, 0)


@pytest.fixture
def fixed_utc() -> datetime:
    return datetime(2026, 2, 1, 8, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def container(store):
    return build_container(store=store)


@pytest.fixture
def app():
    return create_app("config.testing")


@pytest.fixture
def client(app):
    return app.test_client()
