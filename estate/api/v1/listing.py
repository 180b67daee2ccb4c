"""Listing endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from estate.api.deps import get_current_user_id, get_listing_service
from estate.schemas.listing import ListingCreate, ListingResponse
from estate.services.listing_service import ListingService

router = APIRouter()


@router.post("/create", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def create_listing(
    listing_in: ListingCreate,
    user_id: str = Depends(get_current_user_id),
    listings: ListingService = Depends(get_listing_service),
):
    """
    Create a listing owned by the signed-in user.

    **Auth**: session cookie required
    """
    return await listings.create(listing_in, user_id)


@router.delete("/delete/{listing_id}", response_model=str)
async def delete_listing(
    listing_id: str,
    user_id: str = Depends(get_current_user_id),
    listings: ListingService = Depends(get_listing_service),
):
    """
    Delete a listing.

    **Auth**: owner only
    """
    await listings.delete(listing_id, user_id)
    return "Listing has been deleted!"


@router.post("/update/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: str,
    patch: Dict[str, Any] = Body(...),
    user_id: str = Depends(get_current_user_id),
    listings: ListingService = Depends(get_listing_service),
):
    """
    Update the supplied fields of a listing.

    **Auth**: owner only. Ownership cannot be transferred; ``userRef`` in the
    body is ignored. The body is validated after the ownership check, so a
    non-owner is refused whatever the payload.
    """
    return await listings.update(listing_id, patch, user_id)


@router.get("/get/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: str,
    listings: ListingService = Depends(get_listing_service),
):
    """Get a listing. Public, no session needed."""
    return await listings.get(listing_id)
