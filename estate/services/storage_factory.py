"""
Storage factory
Returns MongoDB or in-memory stores based on STORAGE_TYPE, so local
development runs without a database server
"""

from typing import Optional

import structlog

from estate.config import get_settings
from estate.db.mongodb import MongoDB
from estate.services.base_store import ListingStore, UserStore
from estate.services.memory_store import InMemoryListingStore, InMemoryUserStore
from estate.services.mongodb_store import MongoListingStore, MongoUserStore

logger = structlog.get_logger(__name__)

_mongo: Optional[MongoDB] = None
_user_store: Optional[UserStore] = None
_listing_store: Optional[ListingStore] = None


async def init_storage():
    """Create the process-wide stores (called from the app lifespan)."""
    global _mongo, _user_store, _listing_store
    if _user_store is not None:
        return

    settings = get_settings()
    if settings.use_mongodb:
        _mongo = MongoDB(settings)
        await _mongo.connect()
        _user_store = MongoUserStore(_mongo)
        _listing_store = MongoListingStore(_mongo)
        logger.info("storage_selected", storage="mongodb", database=settings.MONGODB_DATABASE)
    else:
        _user_store = InMemoryUserStore()
        _listing_store = InMemoryListingStore()
        logger.warning("storage_selected", storage="memory")


def close_storage():
    global _mongo, _user_store, _listing_store
    if _mongo is not None:
        _mongo.close()
    _mongo = None
    _user_store = None
    _listing_store = None


def get_mongo() -> Optional[MongoDB]:
    return _mongo


def get_user_store() -> UserStore:
    if _user_store is None:
        raise RuntimeError("Storage is not initialized")
    return _user_store


def get_listing_store() -> ListingStore:
    if _listing_store is None:
        raise RuntimeError("Storage is not initialized")
    return _listing_store
