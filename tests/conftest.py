"""Shared fixtures for the test suite."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from string_analyzer.main import app, get_store
from string_analyzer.store import InMemoryStringStore, SQLStringStore
from string_analyzer.utils import build_string_record


def make_record(value: str, created_at=None) -> dict:
    """Factory for creating analyzed test records."""
    return build_string_record(value, created_at or datetime(2025, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def memory_store():
    """Fresh in-memory store."""
    return InMemoryStringStore()


@pytest.fixture
def sql_store():
    """SQL store backed by in-memory SQLite."""
    store = SQLStringStore("sqlite:///:memory:")
    yield store
    store.engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Run a test against every store backend."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(memory_store):
    """API client with the store dependency pointed at a fresh store."""
    app.dependency_overrides[get_store] = lambda: memory_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_records():
    """Records covering palindromes, multi-word values and padded values."""
    return [
        make_record("racecar"),
        make_record("hello world"),
        make_record("Level"),
        make_record("  padded value  "),
        make_record("a man a plan"),
        make_record("z"),
    ]
