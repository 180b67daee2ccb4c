"""API routes."""

from fastapi import APIRouter

from estate.api.v1 import auth, listing, user

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(listing.router, prefix="/listing", tags=["Listings"])
api_router.include_router(user.router, prefix="/user", tags=["Users"])
