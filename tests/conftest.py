"""
Shared fixtures.

The Gemini client is always replaced by an AsyncMock so no test reaches the
real API. The store is a real ReviewStore on a throwaway SQLite file.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from main import app
from moviesense.db import ReviewRow, ReviewStore, get_store
from moviesense.llm import get_completion_client


@pytest.fixture
def store(tmp_path):
    return ReviewStore(f"sqlite:///{tmp_path / 'reviews.db'}")


@pytest.fixture
def completion_client():
    client = AsyncMock()
    client.complete.return_value = '{"sentiment":"Positive","explanation":"Strong praise language."}'
    return client


@pytest.fixture
def api(store, completion_client):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_completion_client] = lambda: completion_client
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def row_count(store):
    """Callable returning the number of stored reviews."""
    def _count() -> int:
        session = store.SessionLocal()
        try:
            return session.query(ReviewRow).count()
        finally:
            session.close()
    return _count
