"""
Async HTTP client for the listings API
Keeps the session cookie between calls the way a browser would
"""

from typing import Any, Dict, List, Optional

import httpx
import structlog

from estate.client.errors import ApiError
from estate.config import get_settings

logger = structlog.get_logger(__name__)


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient``; one instance per signed-in session."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or get_settings().API_BASE_URL,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        response = await self._client.request(method, path, json=json)
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("success") is False:
            logger.info("api_error", path=path, status=data.get("statusCode"), message=data.get("message"))
            raise ApiError(data.get("statusCode", response.status_code), data.get("message", ""))
        if response.is_error:
            raise ApiError(response.status_code, response.text)
        return data

    # Auth

    async def signup(self, username: str, email: str, password: str) -> str:
        return await self._request(
            "POST",
            "/api/auth/signup",
            json={"username": username, "email": email, "password": password},
        )

    async def signin(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/api/auth/signin",
            json={"email": email, "password": password},
        )

    async def google_signin(
        self,
        name: str,
        email: str,
        photo: Optional[str] = None,
        id_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {"name": name, "email": email, "photo": photo}
        if id_token:
            payload["idToken"] = id_token
        return await self._request("POST", "/api/auth/google", json=payload)

    async def signout(self) -> str:
        message = await self._request("GET", "/api/auth/signout")
        self._client.cookies.clear()
        return message

    # Listings

    async def create_listing(self, listing: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/api/listing/create", json=listing)

    async def update_listing(self, listing_id: str, listing: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"/api/listing/update/{listing_id}", json=listing)

    async def delete_listing(self, listing_id: str) -> str:
        return await self._request("DELETE", f"/api/listing/delete/{listing_id}")

    async def get_listing(self, listing_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/api/listing/get/{listing_id}")

    async def user_listings(self, user_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/api/user/listings/{user_id}")
