"""MongoDB-backed user and listing stores."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import structlog
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from estate.core.errors import ConflictError
from estate.db.mongodb import MongoDB
from estate.services.base_store import ListingStore, UserStore

logger = structlog.get_logger(__name__)


def _object_id(value: Optional[str]) -> Optional[ObjectId]:
    # ObjectId(None) would mint a fresh id
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def _to_wire(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Replace the ObjectId with its hex string."""
    if document is None:
        return None
    document = dict(document)
    document["_id"] = str(document["_id"])
    return document


def conflict_from_duplicate_key(error: DuplicateKeyError) -> ConflictError:
    """Name the field behind a unique index violation."""
    details = error.details or {}
    fields = list((details.get("keyPattern") or details.get("keyValue") or {}).keys())
    if fields:
        return ConflictError(f"User with this {fields[0]} already exists")
    return ConflictError(str(error))


class MongoUserStore(UserStore):
    def __init__(self, mongo: MongoDB):
        self.mongo = mongo

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return _to_wire(await self.mongo.users.find_one({"email": email}))

    async def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        oid = _object_id(user_id)
        if oid is None:
            return None
        return _to_wire(await self.mongo.users.find_one({"_id": oid}))

    async def username_exists(self, username: str) -> bool:
        return await self.mongo.users.count_documents({"username": username}, limit=1) > 0

    async def insert(self, user: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        document = {**user, "createdAt": now, "updatedAt": now}
        try:
            result = await self.mongo.users.insert_one(document)
        except DuplicateKeyError as e:
            logger.info("user_insert_conflict", key=(e.details or {}).get("keyValue"))
            raise conflict_from_duplicate_key(e)
        document["_id"] = result.inserted_id
        return _to_wire(document)


class MongoListingStore(ListingStore):
    def __init__(self, mongo: MongoDB):
        self.mongo = mongo

    async def insert(self, listing: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        document = {**listing, "createdAt": now, "updatedAt": now}
        result = await self.mongo.listings.insert_one(document)
        document["_id"] = result.inserted_id
        return _to_wire(document)

    async def find_by_id(self, listing_id: str) -> Optional[Dict[str, Any]]:
        oid = _object_id(listing_id)
        if oid is None:
            return None
        return _to_wire(await self.mongo.listings.find_one({"_id": oid}))

    async def update(self, listing_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        oid = _object_id(listing_id)
        if oid is None:
            return None
        updated = await self.mongo.listings.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return _to_wire(updated)

    async def delete(self, listing_id: str) -> bool:
        oid = _object_id(listing_id)
        if oid is None:
            return False
        result = await self.mongo.listings.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def find_by_owner(self, user_id: str) -> List[Dict[str, Any]]:
        cursor = self.mongo.listings.find({"userRef": user_id}).sort([("createdAt", -1), ("_id", -1)])
        return [_to_wire(doc) async for doc in cursor]
