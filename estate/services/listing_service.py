"""Listing CRUD with ownership checks."""

from typing import Any, Dict, List

import structlog

from estate.core.errors import ForbiddenError, NotFoundError
from estate.schemas.listing import ListingCreate, ListingUpdate
from estate.services.base_store import ListingStore

logger = structlog.get_logger(__name__)


class ListingService:
    def __init__(self, listings: ListingStore):
        self.listings = listings

    async def create(self, listing: ListingCreate, owner_id: str) -> Dict[str, Any]:
        document = listing.model_dump(by_alias=True)
        document["userRef"] = owner_id
        created = await self.listings.insert(document)
        logger.info("listing_created", listing_id=created["_id"], user_id=owner_id)
        return created

    async def get(self, listing_id: str) -> Dict[str, Any]:
        listing = await self.listings.find_by_id(listing_id)
        if not listing:
            raise NotFoundError("Listing not found!")
        return listing

    async def update(self, listing_id: str, patch: Dict[str, Any], owner_id: str) -> Dict[str, Any]:
        listing = await self.get(listing_id)
        if listing["userRef"] != owner_id:
            logger.warning("listing_update_forbidden", listing_id=listing_id, user_id=owner_id)
            raise ForbiddenError("You can only update your own listings!")

        fields = ListingUpdate.model_validate(patch).model_dump(
            by_alias=True, exclude_unset=True, exclude_none=True
        )
        if not fields:
            return listing

        updated = await self.listings.update(listing_id, fields)
        if updated is None:
            # Deleted between the ownership check and the write
            raise NotFoundError("Listing not found!")
        logger.info("listing_updated", listing_id=listing_id, fields=sorted(fields))
        return updated

    async def delete(self, listing_id: str, owner_id: str):
        listing = await self.get(listing_id)
        if listing["userRef"] != owner_id:
            logger.warning("listing_delete_forbidden", listing_id=listing_id, user_id=owner_id)
            raise ForbiddenError("You can only delete your own listings!")

        if not await self.listings.delete(listing_id):
            raise NotFoundError("Listing not found!")
        logger.info("listing_deleted", listing_id=listing_id, user_id=owner_id)

    async def list_for_user(self, user_id: str, acting_user_id: str) -> List[Dict[str, Any]]:
        if user_id != acting_user_id:
            raise ForbiddenError("You can only view your own listings!")
        return await self.listings.find_by_owner(user_id)
