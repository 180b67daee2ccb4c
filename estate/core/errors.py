"""Application error taxonomy and the JSON error envelope."""

from typing import Any, Dict, Optional

from fastapi import status


class AppError(Exception):
    """Error carrying the HTTP status code it should be reported with."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class ServiceUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Service unavailable"


def error_handler(status_code: int, message: str) -> AppError:
    """Build an ad-hoc error for a status code that has no dedicated class."""
    return AppError(message, status_code=status_code)


def error_body(status_code: int, message: str) -> Dict[str, Any]:
    """Response body shared by every failed request."""
    return {
        "success": False,
        "statusCode": status_code,
        "message": message,
    }
