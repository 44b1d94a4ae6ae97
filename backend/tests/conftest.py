"""
ProductHub Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fake_store:      in-memory stand-in for MongoStore (no MongoDB needed)
    ├── down_store:      a store whose connect() always fails
    ├── broken_store:    connects, but every collection call raises a driver error
    ├── test_client:     HTTPX AsyncClient wired to fake_store
    └── down_client / broken_client: same app wired to the failing stores
"""

import copy
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import ServerSelectionTimeoutError

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any app import: settings are read once at import time
os.environ["MONGO_URI"] = "mongodb://localhost:27017/?serverSelectionTimeoutMS=100"
os.environ["MONGO_DB_NAME"] = "producthub_test"
os.environ["LOG_LEVEL"] = "WARNING"

from app.database import COLLECTION_NAMES, Collections, get_store  # noqa: E402
from app.exceptions import StoreConnectionError  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-memory collections
# ══════════════════════════════════════════════════════════════════════════

class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    """
    The part of the async pymongo collection API the services use.

    Filters are plain equality on top-level keys; updates support $set only.
    Documents are deep-copied in and out, like a real round-trip.
    """

    def __init__(self, name: str):
        self.name = name
        self.docs: List[Dict[str, Any]] = []

    @staticmethod
    def _matches(doc: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
        return all(doc.get(key) == value for key, value in (query or {}).items())

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.docs if self._matches(d, query)])

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for doc in self.docs:
            if self._matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, doc: Dict[str, Any]) -> SimpleNamespace:
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"], acknowledged=True)

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any]) -> SimpleNamespace:
        for doc in self.docs:
            if self._matches(doc, query):
                before = copy.deepcopy(doc)
                doc.update(copy.deepcopy(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, modified_count=int(doc != before))
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query: Dict[str, Any]) -> SimpleNamespace:
        for i, doc in enumerate(self.docs):
            if self._matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def count_documents(self, query: Dict[str, Any]) -> int:
        return sum(1 for d in self.docs if self._matches(d, query))


class BrokenCollection:
    """Every call fails the way pymongo does when no server is selectable."""

    def __init__(self, name: str):
        self.name = name

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("No servers found yet")

    def find(self, *args, **kwargs):
        return SimpleNamespace(to_list=self._async_fail)

    async def _async_fail(self, *args, **kwargs):
        self._fail()

    find_one = _async_fail
    insert_one = _async_fail
    update_one = _async_fail
    delete_one = _async_fail
    count_documents = _async_fail


class FakeStore:
    """Duck-typed MongoStore holding one collection object per name."""

    def __init__(self, collection_cls=FakeCollection):
        self.collections = Collections(**{name: collection_cls(name) for name in COLLECTION_NAMES})
        self.connect_calls = 0

    async def connect(self) -> Collections:
        self.connect_calls += 1
        return self.collections

    async def close(self) -> None:
        pass


class DownStore:
    """A store that never manages to connect."""

    async def connect(self) -> Collections:
        raise StoreConnectionError(context={"error_type": "ServerSelectionTimeoutError"})

    async def close(self) -> None:
        pass


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def down_store():
    return DownStore()


@pytest.fixture
def broken_store():
    return FakeStore(collection_cls=BrokenCollection)


async def _client_for(store):
    from app.main import app

    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_store, None)


@pytest_asyncio.fixture
async def test_client(fake_store):
    """
    HTTPX AsyncClient talking to the real app, with the in-memory store
    injected through FastAPI's dependency overrides.

    Usage:
        async def test_list(test_client, fake_store):
            response = await test_client.get("/products")
    """
    async for client in _client_for(fake_store):
        yield client


@pytest_asyncio.fixture
async def down_client(down_store):
    async for client in _client_for(down_store):
        yield client


@pytest_asyncio.fixture
async def broken_client(broken_store):
    async for client in _client_for(broken_store):
        yield client
