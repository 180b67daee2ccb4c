"""
API Dependencies
Service wiring and authentication shared by the route modules
"""

from fastapi import Depends

from estate.config import Settings, get_settings
from estate.core.security import get_current_user_id
from estate.services.auth_service import AuthService
from estate.services.base_store import ListingStore, UserStore
from estate.services.listing_service import ListingService
from estate.services.storage_factory import get_listing_store, get_user_store

# Re-exported so routers import auth from one place
__all__ = ["get_auth_service", "get_listing_service", "get_current_user_id"]


def get_auth_service(
    users: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(users, settings)


def get_listing_service(
    listings: ListingStore = Depends(get_listing_store),
) -> ListingService:
    return ListingService(listings)
