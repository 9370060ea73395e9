"""
Sucoi - MongoDB Connection Handle
==================================
Owns the single async ``motor`` client shared by every request and hands
out the three collections the app uses.

Lifecycle
---------
``connect()``
    Pings the server and creates the indexes the data model relies on.
    Raises ``DatabaseConnectionError`` if the server is unreachable, so a
    bad ``MONGO_URI`` stops startup instead of failing every request.
``close()``
    Closes the client.  Called once from the application lifespan.

The client itself is created lazily by motor and only opens sockets on
first use, so building a ``MongoDatabase`` never blocks.  It is built with
``tz_aware=True``: stored dates come back as UTC-aware datetimes.

Usage:
    from sucoi.src.database.mongo import MongoDatabase
    database = MongoDatabase.from_settings(settings)
    await database.connect()
    users = UserStore(database)
"""

from __future__ import annotations

import motor.motor_asyncio
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from sucoi.config.settings import Settings
from sucoi.src.core.errors import DatabaseConnectionError
from sucoi.src.utils.logger import get_logger

logger = get_logger(__name__)

USERS_COLLECTION = "users"
GOALS_COLLECTION = "goals"
CHATS_COLLECTION = "chats"


class MongoDatabase:
    """
    Connection-and-collections handle for the Sucoi database.

    Parameters
    ----------
    client
        An ``AsyncIOMotorClient`` (or a compatible client, e.g. the
        ``mongomock-motor`` client used in tests).
    db_name
        Name of the database holding the collections.
    """

    __slots__ = ("_client", "_db")

    def __init__(self, client: motor.motor_asyncio.AsyncIOMotorClient, db_name: str) -> None:
        self._client = client
        self._db = client[db_name]


    @classmethod
    def from_settings(cls, settings: Settings) -> MongoDatabase:
        """Build a handle from ``MONGO_URI`` / ``MONGO_DB_NAME``."""
        client = motor.motor_asyncio.AsyncIOMotorClient(settings.MONGO_URI.get_secret_value(), tz_aware=True)
        logger.info("[DB] MongoDB async client created for database '%s'.", settings.MONGO_DB_NAME)
        return cls(client, settings.MONGO_DB_NAME)

    # ══════════════════════════════════════════════════════════════════
    #  LIFECYCLE
    # ══════════════════════════════════════════════════════════════════

    async def connect(self) -> None:
        """Verify the server is reachable and ensure indexes exist."""
        try:
            await self._client.admin.command("ping")
            await self.ensure_indexes()
        except PyMongoError as exc:
            logger.error("[DB] MongoDB connection failed: %s", exc)
            raise DatabaseConnectionError(f"Could not connect to MongoDB: {exc}") from exc
        logger.info("[DB] Connected to MongoDB.")


    async def ensure_indexes(self) -> None:
        """Create the uniqueness constraints of the data model (idempotent)."""
        await self.users.create_index([("email", ASCENDING)], unique=True)
        await self.goals.create_index([("username", ASCENDING), ("taskId", ASCENDING)], unique=True)
        await self.chats.create_index([("username", ASCENDING), ("createdAt", ASCENDING)])
        logger.debug("[DB] Indexes ensured.")


    def close(self) -> None:
        self._client.close()
        logger.info("[DB] MongoDB client closed.")

    # ══════════════════════════════════════════════════════════════════
    #  COLLECTIONS
    # ══════════════════════════════════════════════════════════════════

    @property
    def users(self) -> motor.motor_asyncio.AsyncIOMotorCollection:
        return self._db[USERS_COLLECTION]


    @property
    def goals(self) -> motor.motor_asyncio.AsyncIOMotorCollection:
        return self._db[GOALS_COLLECTION]


    @property
    def chats(self) -> motor.motor_asyncio.AsyncIOMotorCollection:
        return self._db[CHATS_COLLECTION]
