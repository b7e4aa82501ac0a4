"""Document store client lifecycle and the persistence gateway."""

import asyncio
import logging
from typing import Any, Awaitable, Optional, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from .config import Settings, settings
from .exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_client(config: Settings = settings) -> AsyncIOMotorClient:
    """
    Create a motor client for the configured store.

    The client connects lazily, so this never fails on an unreachable store.
    Server selection is bounded by the store timeout so that the first
    operation against a dead store fails instead of hanging.
    """
    timeout_ms = int(config.store_timeout_seconds * 1000)
    return AsyncIOMotorClient(
        config.mongodb_uri,
        serverSelectionTimeoutMS=timeout_ms,
        connectTimeoutMS=timeout_ms,
        socketTimeoutMS=timeout_ms,
    )


def get_database(client: AsyncIOMotorClient, config: Settings = settings) -> AsyncIOMotorDatabase:
    """Return the database named by the connection string, or the configured default."""
    return client.get_default_database(config.mongodb_database)


def as_object_id(record_id: Any) -> Any:
    """
    Coerce an identifier to an ObjectId when it is one.

    Identifiers that are not ObjectIds are looked up literally, so an
    arbitrary string yields "not found" rather than a cast error.
    """
    if isinstance(record_id, str) and ObjectId.is_valid(record_id):
        return ObjectId(record_id)
    return record_id


class PersistenceGateway:
    """
    Thin wrapper over the document store shared by every entity service.

    Each operation returns the record (or ``None`` when absent) and raises
    StoreUnavailableError for any driver error or timeout.
    """

    def __init__(self, database: AsyncIOMotorDatabase, timeout_seconds: float = settings.store_timeout_seconds):
        self.database = database
        self.timeout_seconds = timeout_seconds

    async def _run(self, awaitable: Awaitable[T], operation: str, collection: str) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise StoreUnavailableError(operation, collection, reason="timeout") from e
        except PyMongoError as e:
            raise StoreUnavailableError(operation, collection, reason=str(e)) from e

    async def find_many(self, collection: str, query: dict[str, Any], limit: Optional[int] = None) -> list[dict[str, Any]]:
        cursor = self.database[collection].find(query)
        return await self._run(cursor.to_list(length=limit), "find", collection)

    async def find_by_id(self, collection: str, record_id: Any) -> Optional[dict[str, Any]]:
        return await self._run(
            self.database[collection].find_one({"_id": as_object_id(record_id)}),
            "find_one",
            collection,
        )

    async def insert(self, collection: str, document: dict[str, Any]) -> str:
        result = await self._run(
            self.database[collection].insert_one(document),
            "insert_one",
            collection,
        )
        return str(result.inserted_id)

    async def update_by_id(
        self,
        collection: str,
        record_id: Any,
        changes: dict[str, Any],
    ) -> Optional[dict[str, Any]]:
        """Apply ``$set`` changes and return the updated document, or None if absent."""
        return await self._run(
            self.database[collection].find_one_and_update(
                {"_id": as_object_id(record_id)},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            ),
            "find_one_and_update",
            collection,
        )

    async def ping(self) -> bool:
        """Return True when the store answers a ping within the timeout."""
        try:
            await self._run(self.database.command("ping"), "ping", "admin")
        except StoreUnavailableError as e:
            logger.debug("Store ping failed", extra={"reason": e.reason})
            return False
        return True


async def init_store(config: Settings = settings) -> tuple[AsyncIOMotorClient, PersistenceGateway]:
    """Create the client and gateway and report whether the store is reachable."""
    client = create_client(config)
    gateway = PersistenceGateway(get_database(client, config), config.store_timeout_seconds)

    if await gateway.ping():
        logger.info("Document store connected", extra={"database": gateway.database.name})
    else:
        logger.error(
            "Document store unreachable; continuing with fallback data",
            extra={"database": gateway.database.name},
        )
    return client, gateway


async def close_store(client: Optional[AsyncIOMotorClient]) -> None:
    """Close store connections."""
    if client is not None:
        client.close()
