"""Client-side errors."""


class ClientError(Exception):
    """Base class for errors raised by the client package."""


class ApiError(ClientError):
    """The API answered with ``{"success": false, ...}``."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class FormError(ClientError):
    """The listing form is not ready to be submitted."""


class ImageCountError(ClientError):
    """Too many (or no) images selected for one listing."""


class UploadError(ClientError):
    """At least one image of a batch failed to upload."""


class NotSignedIn(ClientError):
    """A private flow was started without a signed-in user."""
