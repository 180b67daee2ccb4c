"""
Document store interfaces
User and listing persistence, implemented over MongoDB and in memory
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class UserStore(ABC):
    """Persistence for user documents.

    Documents are plain dicts using the wire field names (``_id`` as a
    string, ``createdAt``/``updatedAt`` as datetimes).
    """

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def username_exists(self, username: str) -> bool:
        pass

    @abstractmethod
    async def insert(self, user: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a user and return the stored document.

        Raises:
            ConflictError: username or email already taken
        """
        pass


class ListingStore(ABC):
    """Persistence for listing documents."""

    @abstractmethod
    async def insert(self, listing: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def find_by_id(self, listing_id: str) -> Optional[Dict[str, Any]]:
        """Return the listing, or None when absent or the id is malformed."""
        pass

    @abstractmethod
    async def update(self, listing_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Set the given fields and return the updated document."""
        pass

    @abstractmethod
    async def delete(self, listing_id: str) -> bool:
        pass

    @abstractmethod
    async def find_by_owner(self, user_id: str) -> List[Dict[str, Any]]:
        pass
