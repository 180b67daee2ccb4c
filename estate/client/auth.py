"""Sign-in flows updating the shared user state."""

from typing import Any, Dict, Optional

from estate.client.api_client import ApiClient
from estate.client.errors import ApiError
from estate.client.state import UserState


async def sign_in(api: ApiClient, state: UserState, email: str, password: str) -> Dict[str, Any]:
    state.sign_in_start()
    try:
        user = await api.signin(email, password)
    except ApiError as e:
        state.sign_in_failure(e.message)
        raise
    state.sign_in_success(user)
    return user


async def sign_in_with_google(
    api: ApiClient,
    state: UserState,
    name: str,
    email: str,
    photo: Optional[str] = None,
    id_token: Optional[str] = None,
) -> Dict[str, Any]:
    """Hand a Google profile to the API and store the resulting user."""
    state.sign_in_start()
    try:
        user = await api.google_signin(name, email, photo=photo, id_token=id_token)
    except ApiError as e:
        state.sign_in_failure(e.message)
        raise
    state.sign_in_success(user)
    return user


async def sign_out(api: ApiClient, state: UserState):
    await api.signout()
    state.sign_out()
