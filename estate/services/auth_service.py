"""Signup, signin and Google sign-in."""

import asyncio
import secrets
from typing import Any, Dict, Optional, Tuple

import structlog
from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token

from estate.config import Settings
from estate.core.errors import (
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from estate.core.security import create_access_token, get_password_hash, verify_password
from estate.services.base_store import UserStore
from estate.utils.constants import OAUTH_USERNAME_SUFFIX_LENGTH

logger = structlog.get_logger(__name__)


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """Strip the password hash from a user document."""
    return {key: value for key, value in user.items() if key != "password"}


class AuthService:
    """Credential checks and token issuance over a user store."""

    def __init__(self, users: UserStore, settings: Settings):
        self.users = users
        self.settings = settings

    async def signup(self, username: str, email: str, password: str) -> Dict[str, Any]:
        """
        Persist a new user with a hashed password.

        No session is issued; the client signs in afterwards.

        Raises:
            ConflictError: username or email already taken
        """
        user = await self.users.insert({
            "username": username,
            "email": email,
            "password": get_password_hash(password),
            "avatar": self.settings.DEFAULT_AVATAR_URL,
        })
        logger.info("user_signed_up", user_id=user["_id"])
        return public_user(user)

    async def signin(self, email: str, password: str) -> Tuple[str, Dict[str, Any]]:
        """Return ``(token, user)`` for valid credentials."""
        user = await self.users.find_by_email(email)
        if not user:
            raise NotFoundError("User not found!")

        if not verify_password(password, user.get("password")):
            logger.info("signin_rejected", user_id=user["_id"])
            raise UnauthorizedError("Wrong credentials!")

        logger.info("user_signed_in", user_id=user["_id"])
        return create_access_token(user["_id"], self.settings), public_user(user)

    async def oauth_signin(
        self,
        name: str,
        email: str,
        photo: Optional[str] = None,
        id_token: Optional[str] = None,
    ) -> Tuple[str, Dict[str, Any]]:
        """
        Sign in with a Google profile, provisioning the user on first login.

        Repeated calls with the same email always resolve to the same user.
        """
        if self.settings.GOOGLE_VERIFY_ID_TOKEN:
            await self._verify_google_token(id_token, email)

        user = await self.users.find_by_email(email)
        if not user:
            user = await self._provision_oauth_user(name, email, photo)

        logger.info("user_signed_in", user_id=user["_id"], provider="google")
        return create_access_token(user["_id"], self.settings), public_user(user)

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        user = await self.users.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found!")
        return public_user(user)

    async def _provision_oauth_user(
        self, name: str, email: str, photo: Optional[str]
    ) -> Dict[str, Any]:
        # Throwaway password; the account signs in through Google
        generated_password = secrets.token_urlsafe(16)
        username = await self._unique_username(name)

        try:
            user = await self.users.insert({
                "username": username,
                "email": email,
                "password": get_password_hash(generated_password),
                "avatar": photo or self.settings.DEFAULT_AVATAR_URL,
            })
        except ConflictError:
            # Lost a first-login race on the same email
            user = await self.users.find_by_email(email)
            if not user:
                raise
            return user

        logger.info("oauth_user_provisioned", user_id=user["_id"], username=username)
        return user

    async def _unique_username(self, name: str) -> str:
        base = "".join(name.split()).lower() or "user"
        while True:
            candidate = base + secrets.token_hex(OAUTH_USERNAME_SUFFIX_LENGTH // 2)
            if not await self.users.username_exists(candidate):
                return candidate

    async def _verify_google_token(self, token: Optional[str], email: str):
        if not token:
            raise UnauthorizedError("Google ID token is required")
        if not self.settings.GOOGLE_CLIENT_ID:
            logger.error("google_client_id_missing")
            raise UnauthorizedError("Google sign-in is not configured")

        try:
            # Blocking certificate fetch
            payload = await asyncio.to_thread(
                google_id_token.verify_oauth2_token,
                token,
                google_requests.Request(),
                self.settings.GOOGLE_CLIENT_ID,
            )
        except google_exceptions.TransportError as e:
            logger.error("google_certs_unavailable", error=str(e))
            raise ServiceUnavailableError(f"Google token verification failed: {e}")
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            logger.warning("google_token_invalid", error=str(e))
            raise UnauthorizedError(f"Invalid Google token: {e}")

        if payload.get("email") != email:
            raise UnauthorizedError("Google token does not match email")
