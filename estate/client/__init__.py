"""Client for the listings API: session, listing forms and image uploads."""

from estate.client.api_client import ApiClient
from estate.client.editor import ListingEditor
from estate.client.errors import (
    ApiError,
    ClientError,
    FormError,
    ImageCountError,
    NotSignedIn,
    UploadError,
)
from estate.client.forms import ListingForm
from estate.client.state import UserState
from estate.client.uploader import ImageFile, ImageUploader

__all__ = [
    "ApiClient",
    "ApiError",
    "ClientError",
    "FormError",
    "ImageCountError",
    "ImageFile",
    "ImageUploader",
    "ListingEditor",
    "ListingForm",
    "NotSignedIn",
    "UploadError",
    "UserState",
]
