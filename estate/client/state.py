"""Signed-in user state shared by the client flows."""

from typing import Any, Dict, Optional

from estate.client.errors import NotSignedIn


class UserState:
    """Current user plus the loading/error flags of the last sign-in attempt."""

    def __init__(self):
        self.current_user: Optional[Dict[str, Any]] = None
        self.loading = False
        self.error: Optional[str] = None

    def sign_in_start(self):
        self.loading = True

    def sign_in_success(self, user: Dict[str, Any]):
        self.current_user = user
        self.loading = False
        self.error = None

    def sign_in_failure(self, error: str):
        self.loading = False
        self.error = error

    def sign_out(self):
        self.current_user = None
        self.loading = False
        self.error = None

    @property
    def is_signed_in(self) -> bool:
        return self.current_user is not None

    def require_user(self) -> Dict[str, Any]:
        """Return the signed-in user or refuse the private flow."""
        if self.current_user is None:
            raise NotSignedIn("Sign in to continue")
        return self.current_user
