"""Database connectivity layer for the Simple User API."""

from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from simple_api.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the MongoDB client and hands out database and collection handles."""

    def __init__(self, config: Optional[Settings] = None) -> None:
        self.settings = config or default_settings
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def initialize(self) -> None:
        """Connect to MongoDB and verify the server is reachable.

        Motor connects lazily, so a ``ping`` is issued to surface a bad
        connection string or an unreachable server here rather than on the
        first request.
        """

        logger.info("Connecting to MongoDB database %s", self.settings.DATABASE_NAME)

        client = AsyncIOMotorClient(
            self.settings.MONGODB_URI,
            tz_aware=True,
            serverSelectionTimeoutMS=self.settings.MONGODB_TIMEOUT_MS,
        )
        try:
            await client.admin.command("ping")
        except Exception:
            client.close()
            raise

        self.client = client
        self.database = client[self.settings.DATABASE_NAME]
        logger.info("Connected to MongoDB database: %s", self.settings.DATABASE_NAME)

    def collection(self, name: Optional[str] = None) -> AsyncIOMotorCollection:
        if self.database is None:
            raise RuntimeError("Database manager is not initialized")
        return self.database[name or self.settings.USERS_COLLECTION]

    async def close(self) -> None:
        """Tear down the client connection."""

        if self.client is not None:
            logger.info("Closing MongoDB connection")
            self.client.close()
            self.client = None
            self.database = None
