"""
In-memory user and listing stores
Same interface and uniqueness rules as the MongoDB stores, for local
development and tests
"""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId

from estate.core.errors import ConflictError
from estate.services.base_store import ListingStore, UserStore


class InMemoryUserStore(UserStore):
    UNIQUE_FIELDS = ("email", "username")

    def __init__(self):
        self.users: Dict[str, Dict[str, Any]] = {}

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        for user in self.users.values():
            if user["email"] == email:
                return copy.deepcopy(user)
        return None

    async def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        user = self.users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def username_exists(self, username: str) -> bool:
        return any(user["username"] == username for user in self.users.values())

    async def insert(self, user: Dict[str, Any]) -> Dict[str, Any]:
        for field in self.UNIQUE_FIELDS:
            if any(existing.get(field) == user.get(field) for existing in self.users.values()):
                raise ConflictError(f"User with this {field} already exists")

        now = datetime.now(timezone.utc)
        document = {**user, "_id": str(ObjectId()), "createdAt": now, "updatedAt": now}
        self.users[document["_id"]] = document
        return copy.deepcopy(document)


class InMemoryListingStore(ListingStore):
    def __init__(self):
        self.listings: Dict[str, Dict[str, Any]] = {}

    async def insert(self, listing: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        document = {**listing, "_id": str(ObjectId()), "createdAt": now, "updatedAt": now}
        self.listings[document["_id"]] = document
        return copy.deepcopy(document)

    async def find_by_id(self, listing_id: str) -> Optional[Dict[str, Any]]:
        listing = self.listings.get(listing_id)
        return copy.deepcopy(listing) if listing else None

    async def update(self, listing_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        listing = self.listings.get(listing_id)
        if listing is None:
            return None
        listing.update(fields)
        listing["updatedAt"] = datetime.now(timezone.utc)
        return copy.deepcopy(listing)

    async def delete(self, listing_id: str) -> bool:
        return self.listings.pop(listing_id, None) is not None

    async def find_by_owner(self, user_id: str) -> List[Dict[str, Any]]:
        owned = [l for l in self.listings.values() if l.get("userRef") == user_id]
        owned.sort(key=lambda l: (l["createdAt"], l["_id"]), reverse=True)
        return copy.deepcopy(owned)
