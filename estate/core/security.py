"""Security utilities: password hashing, JWT session tokens."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from estate.config import Settings, get_settings
from estate.core.errors import ForbiddenError, UnauthorizedError
from estate.services.base_store import UserStore
from estate.services.storage_factory import get_user_store

BCRYPT_ROUNDS = 10

# Bearer header is a fallback for non-browser clients; the cookie wins
bearer_scheme = HTTPBearer(auto_error=False)


def _password_bytes(password: str) -> bytes:
    # bcrypt only reads the first 72 bytes
    return password.encode("utf-8")[:72]


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh salt."""
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    """Compare a plaintext password against a stored hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(user_id: str, settings: Optional[Settings] = None) -> str:
    """Create a signed session token for a user."""
    settings = settings or get_settings()
    to_encode = {"sub": str(user_id), "iat": datetime.now(timezone.utc)}
    if settings.ACCESS_TOKEN_EXPIRE_MINUTES:
        to_encode["exp"] = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str, settings: Optional[Settings] = None) -> dict:
    """Decode and verify a session token."""
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise ForbiddenError("Forbidden")


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
    users: UserStore = Depends(get_user_store),
) -> str:
    """Resolve the acting user's id from the session cookie or bearer token.

    The token must belong to a user that still exists.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials

    if not token:
        raise UnauthorizedError("Unauthorized")

    payload = decode_token(token, settings)
    user_id = payload.get("sub")
    if not user_id:
        raise ForbiddenError("Forbidden")

    if await users.find_by_id(user_id) is None:
        raise UnauthorizedError("User not found")
    return user_id
