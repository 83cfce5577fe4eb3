"""
Acronym API: MongoDB Storage Accessor
========================================

What:  Per-request access to the acronyms collection through Motor.
Why:   Centralizes all connection logic in one place.
How:   Each request gets its own AcronymStore via a FastAPI `yield`
       dependency. The store opens its Motor client on first use and the
       dependency closes it in a `finally` block, so the connection is
       released on every exit path (success, validation short-circuit,
       or exception).
Who:   Route handlers receive the store through Depends(); AcronymService
       reads `store.collection` inside its own error handling.

Connection Strategy:
    The client is created lazily: validation failures return 400 without
    ever constructing a client, and a malformed MONGO_URI surfaces as a
    storage error (500) from inside the service instead of escaping from
    the dependency.
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from bson import ObjectId
from fastapi import Request
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
)

from acronym_api.config import Settings

logger = logging.getLogger(__name__)


class AcronymStore:
    """
    Scoped handle on the acronyms collection for a single request.

    Usage:
        store = AcronymStore(settings)
        try:
            await store.collection.find_one({...})
        finally:
            store.close()
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._client: Optional[AsyncIOMotorClient] = None

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            self._client = AsyncIOMotorClient(
                self._settings.mongo_uri,
                serverSelectionTimeoutMS=self._settings.mongo_timeout_ms,
            )
        return self._client

    @property
    def collection(self) -> AsyncIOMotorCollection:
        return self.client[self._settings.database_name][self._settings.collection_name]

    async def ping(self) -> None:
        """Round-trip to the server; raises if MongoDB is unreachable."""
        await self.client.admin.command("ping")

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


async def get_acronym_store(request: Request) -> AsyncGenerator[AcronymStore, None]:
    """
    FastAPI dependency that provides an AcronymStore per request.

    The settings come from `app.state.settings` so that an app built by
    `create_app(settings=...)` never talks to the default database.
    """
    store = AcronymStore(request.app.state.settings)
    try:
        yield store
    finally:
        # Always release the client, including after an exception
        store.close()


def id_filter(acronym_id: str) -> Dict[str, Any]:
    """
    Build the `_id` filter for a path parameter.

    Records inserted through the API carry ObjectIds; seeded records may
    carry plain string ids. A 24-hex id therefore matches either form.
    """
    if ObjectId.is_valid(acronym_id):
        return {"_id": {"$in": [ObjectId(acronym_id), acronym_id]}}
    return {"_id": acronym_id}
