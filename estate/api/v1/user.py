"""User endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from estate.api.deps import get_current_user_id, get_listing_service
from estate.schemas.listing import ListingResponse
from estate.services.listing_service import ListingService

router = APIRouter()


@router.get("/listings/{user_id}", response_model=List[ListingResponse])
async def get_user_listings(
    user_id: str,
    acting_user_id: str = Depends(get_current_user_id),
    listings: ListingService = Depends(get_listing_service),
):
    """Listings owned by the signed-in user, newest first."""
    return await listings.list_for_user(user_id, acting_user_id)
