"""
ProductHub Backend — Document Store Access
============================================

What:  Lazily-connected MongoDB client, the six collection handles, the
       FastAPI dependency that hands them to routes, and the helpers that
       translate driver errors into application exceptions.
How:   MongoStore builds one AsyncMongoClient on first use, pings the server,
       and caches a Collections bundle for the rest of the process lifetime.
       Concurrent first requests wait on an asyncio.Lock, so only one client
       is ever created.
Who:   Services call `await store.connect()` at the start of every operation.
When:  First connection on the first request; closed in the app lifespan.

Connection Lifecycle:
    ┌──────────────┐  connect()  ┌──────────────┐  close()  ┌──────────────┐
    │ disconnected │────────────▶│  connected   │──────────▶│ disconnected │
    └──────────────┘             └──────────────┘           └──────────────┘
           ▲   ping fails: client closed, nothing cached, error raised
           └───────────────────────────────────────────────────────────────

Pooling, server selection and socket timeouts are left to the driver.
"""

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from bson import ObjectId
from bson.errors import BSONError, InvalidId
from pydantic import ValidationError as PydanticValidationError
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from app.config import settings
from app.exceptions import (
    InvalidIdError,
    MalformedDocumentError,
    StoreConnectionError,
    StoreOperationError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Collections:
    """
    Handles for every collection in the ProductHub database.

    `stores` is provisioned alongside the others but no endpoint reads or
    writes it; it is kept so existing databases keep a stable layout.
    """

    users: Any
    products: Any
    stores: Any
    ratings: Any
    categories: Any
    carts: Any


COLLECTION_NAMES = ("users", "products", "stores", "ratings", "categories", "carts")


def _default_client_factory(uri: str) -> AsyncMongoClient:
    # Stable API v1, strict, with deprecation errors
    return AsyncMongoClient(
        uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
        tz_aware=True,
    )


class MongoStore:
    """
    Process-scoped owner of the MongoDB connection.

    Attributes:
        uri:            Connection string (from MONGO_URI)
        database_name:  Logical database holding all collections

    The client factory is injectable so tests can count client creations
    without a running server.
    """

    def __init__(
        self,
        uri: str,
        database_name: str,
        client_factory: Callable[[str], Any] = _default_client_factory,
    ):
        self.uri = uri
        self.database_name = database_name
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self._collections: Optional[Collections] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._collections is not None

    async def connect(self) -> Collections:
        """
        Return the cached collection handles, connecting first if needed.

        Idempotent: after the first success every call returns the same
        Collections instance without touching the network.

        Raises:
            StoreConnectionError: the client could not be built or the
                server did not answer the ping.
        """
        if self._collections is not None:
            return self._collections

        async with self._lock:
            # Another coroutine may have connected while we waited
            if self._collections is not None:
                return self._collections

            client = None
            try:
                client = self._client_factory(self.uri)
                await client.admin.command("ping")
            except (PyMongoError, BSONError, ValueError, TypeError) as e:
                logger.error("MongoDB connection failed: %s", str(e))
                if client is not None:
                    await self._close_quietly(client)
                raise StoreConnectionError(
                    context={"error_type": type(e).__name__, "database": self.database_name},
                ) from e

            database = client[self.database_name]
            self._client = client
            self._collections = Collections(
                **{name: database[name] for name in COLLECTION_NAMES}
            )
            logger.info("MongoDB connected (database=%s)", self.database_name)
            return self._collections

    async def close(self) -> None:
        """Close the client and forget the cached handles."""
        async with self._lock:
            client = self._client
            self._client = None
            self._collections = None
        if client is not None:
            await client.close()
            logger.info("MongoDB connection closed")

    @staticmethod
    async def _close_quietly(client: Any) -> None:
        try:
            await client.close()
        except PyMongoError as e:
            logger.debug("Ignoring error while closing failed client: %s", str(e))


# ── Singleton Instance ────────────────────────────────────────────────────
# No network I/O happens here; the client is created on the first connect()
store = MongoStore(settings.mongo_uri, settings.mongo_db_name)


def get_store() -> MongoStore:
    """
    FastAPI dependency returning the process-wide store.

    Tests replace it through `app.dependency_overrides[get_store]`.
    """
    return store


# ── Error Translation ─────────────────────────────────────────────────────

def to_object_id(raw_id: str) -> ObjectId:
    """Parse a path parameter into an ObjectId or raise InvalidIdError."""
    try:
        return ObjectId(raw_id)
    except (InvalidId, TypeError) as e:
        raise InvalidIdError(raw_id=str(raw_id)) from e


@contextmanager
def store_errors(operation: str, collection: str) -> Iterator[None]:
    """
    Translate driver and document-shape errors raised inside the block.

    Usage:
        with store_errors("find", "products"):
            docs = await collections.products.find().to_list()

    Application exceptions (InvalidIdError, StoreConnectionError, ...) pass
    through untouched.
    """
    try:
        yield
    except InvalidId as e:
        raise InvalidIdError(raw_id=str(e)) from e
    except PydanticValidationError as e:
        logger.error("Malformed %s document during %s: %s", collection, operation, str(e))
        raise MalformedDocumentError(
            collection=collection,
            context={"operation": operation, "errors": e.error_count()},
        ) from e
    except (PyMongoError, BSONError) as e:
        logger.error("MongoDB %s on %s failed: %s", operation, collection, str(e))
        raise StoreOperationError(
            context={
                "operation": operation,
                "collection": collection,
                "error_type": type(e).__name__,
            },
        ) from e
