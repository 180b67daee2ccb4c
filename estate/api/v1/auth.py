"""Authentication endpoints."""

from fastapi import APIRouter, Depends, Response, status

from estate.api.deps import get_auth_service, get_current_user_id
from estate.config import Settings, get_settings
from estate.schemas.auth import (
    GoogleSigninRequest,
    SigninRequest,
    SignupRequest,
    UserResponse,
)
from estate.services.auth_service import AuthService

router = APIRouter()


def set_session_cookie(response: Response, token: str, settings: Settings):
    """Attach the session token as an HTTP-only cookie."""
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_COOKIE_MAX_AGE,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite=settings.SESSION_COOKIE_SAMESITE,
        path="/",
    )


@router.post("/signup", response_model=str, status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignupRequest,
    auth: AuthService = Depends(get_auth_service),
):
    """Register a new user. No session is started."""
    await auth.signup(request.username, request.email, request.password)
    return "User created successfully!"


@router.post("/signin", response_model=UserResponse)
async def signin(
    request: SigninRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    """Sign in with email and password; sets the session cookie."""
    token, user = await auth.signin(request.email, request.password)
    set_session_cookie(response, token, settings)
    return user


@router.post("/google", response_model=UserResponse)
async def google_signin(
    request: GoogleSigninRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    """Sign in with a Google profile; auto-registers users on first login."""
    token, user = await auth.oauth_signin(
        request.name,
        request.email,
        photo=request.photo,
        id_token=request.id_token,
    )
    set_session_cookie(response, token, settings)
    return user


@router.get("/signout", response_model=str)
async def signout(response: Response, settings: Settings = Depends(get_settings)):
    """Sign out (the token itself stays valid; the cookie is dropped)."""
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return "User has been logged out!"


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user_id: str = Depends(get_current_user_id),
    auth: AuthService = Depends(get_auth_service),
):
    """Get current user information."""
    return await auth.get_user(user_id)
