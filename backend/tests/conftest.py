"""
Acronym API: Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests never need a running MongoDB: the Motor collection is replaced
       by AsyncMock/MagicMock objects shaped like the driver's API.

Fixtures:
    ├── mock_collection: stand-in for AsyncIOMotorCollection
    ├── mock_store: AcronymStore-like object exposing mock_collection
    ├── test_settings: isolated Settings (own database/collection names)
    └── test_client: HTTPX AsyncClient against a fresh app, store overridden
"""

import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URI"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "ACRONYMS_TEST"
os.environ["LOG_LEVEL"] = "WARNING"

from acronym_api.config import Settings  # noqa: E402
from acronym_api.database import get_acronym_store  # noqa: E402


def make_cursor(docs):
    """Cursor mock whose to_list() resolves to `docs`."""
    cursor = MagicMock()
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(docs))
    return cursor


@pytest.fixture
def cursor_factory():
    """Builds Motor-like cursors: cursor_factory([...docs])."""
    return make_cursor


@pytest.fixture
def mock_collection():
    """
    A MagicMock that simulates AsyncIOMotorCollection behavior.

    find()/aggregate() return cursors synchronously (as Motor does);
    find_one/insert_one/update_one/delete_one are awaitable.

    Usage:
        mock_collection.find.return_value = make_cursor([...])
        mock_collection.find_one.return_value = {"_id": "...", ...}
    """
    collection = MagicMock()
    collection.find.return_value = make_cursor([])
    collection.aggregate.return_value = make_cursor([])
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock(
        return_value=SimpleNamespace(acknowledged=True, inserted_id="65a1f0c2e4b0a1b2c3d4e5f6")
    )
    collection.update_one = AsyncMock(
        return_value=SimpleNamespace(matched_count=1, modified_count=1)
    )
    collection.delete_one = AsyncMock(return_value=SimpleNamespace(deleted_count=1))
    return collection


@pytest.fixture
def mock_store(mock_collection):
    """AcronymStore replacement: `.collection` is the mock, `.ping()` succeeds."""
    store = MagicMock()
    store.collection = mock_collection
    store.ping = AsyncMock(return_value=None)
    return store


@pytest.fixture
def sample_records():
    return [
        {"_id": "65a1f0c2e4b0a1b2c3d4e5f1", "acronym": "CPU", "definition": "Central Processing Unit"},
        {"_id": "65a1f0c2e4b0a1b2c3d4e5f2", "acronym": "GPU", "definition": "Graphics Processing Unit"},
        {"_id": "65a1f0c2e4b0a1b2c3d4e5f3", "acronym": "RAM", "definition": "Random Access Memory"},
    ]


@pytest.fixture
def test_settings(tmp_path):
    static_dir = tmp_path / "public"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<h1>Acronyms</h1>")
    return Settings(
        database_name="ACRONYMS_TEST",
        collection_name="acronyms_test",
        static_dir=str(static_dir),
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_client(test_settings, mock_store):
    """
    HTTPX AsyncClient talking to a fresh app whose store dependency yields
    `mock_store`.

    Usage:
        async def test_list(test_client, mock_collection):
            response = await test_client.get("/acronym?page=1&limit=2")
    """
    from acronym_api.main import create_app

    app = create_app(test_settings)

    async def override_store():
        yield mock_store

    app.dependency_overrides[get_acronym_store] = override_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
