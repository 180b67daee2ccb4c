"""MongoDB connection management."""

from typing import Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from estate.config import Settings

logger = structlog.get_logger(__name__)

USERS_COLLECTION = "users"
LISTINGS_COLLECTION = "listings"


class MongoDB:
    """
    Owns the Motor client for the process.

    The driver keeps its own connection pool; request handlers share it
    through the collections handed out here.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        """Open the client and make sure indexes exist."""
        if self.client is not None:
            return

        try:
            self.client = AsyncIOMotorClient(
                self.settings.MONGODB_URI,
                maxPoolSize=self.settings.MONGODB_MAX_POOL_SIZE,
                minPoolSize=self.settings.MONGODB_MIN_POOL_SIZE,
                serverSelectionTimeoutMS=self.settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
                tz_aware=True,
            )
            self.db = self.client[self.settings.MONGODB_DATABASE]
            await self._create_indexes()
            logger.info(
                "mongodb_connected",
                database=self.settings.MONGODB_DATABASE,
                pool_max=self.settings.MONGODB_MAX_POOL_SIZE,
            )
        except Exception:
            logger.exception("mongodb_connect_failed")
            raise

    async def _create_indexes(self):
        """Unique indexes back the signup conflict checks."""
        users = self.db[USERS_COLLECTION]
        await users.create_index("email", unique=True)
        await users.create_index("username", unique=True)

        listings = self.db[LISTINGS_COLLECTION]
        await listings.create_index("userRef")

    @property
    def users(self):
        return self.db[USERS_COLLECTION]

    @property
    def listings(self):
        return self.db[LISTINGS_COLLECTION]

    async def ping(self) -> bool:
        if self.client is None:
            return False
        await self.client.admin.command("ping")
        return True

    def close(self):
        """Close MongoDB connection."""
        if self.client is not None:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("mongodb_closed")
