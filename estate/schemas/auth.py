"""Authentication schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class SignupRequest(BaseModel):
    """Signup request schema."""

    username: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=1)


class SigninRequest(BaseModel):
    """Signin request schema.

    The email is not format-checked; any value is looked up as given, so an
    unknown or malformed address is reported as a missing user.
    """

    email: str
    password: str


class GoogleSigninRequest(BaseModel):
    """Profile handed over by the client after a Google popup sign-in."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., min_length=1)
    email: EmailStr
    photo: Optional[str] = None
    id_token: Optional[str] = Field(
        default=None,
        description="Google ID token, required when server-side verification is enabled",
    )


class UserResponse(BaseModel):
    """User as returned to clients. The password hash is never part of it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., alias="_id")
    username: str
    email: str
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
