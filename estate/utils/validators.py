"""Validators."""

import mimetypes
from typing import List, Optional

from estate.utils.constants import ALLOWED_IMAGE_EXTENSIONS


def validate_file_extension(filename: str, allowed_extensions: List[str]) -> bool:
    """Validate file extension."""
    if not filename or "." not in filename:
        return False

    extension = filename.rsplit('.', 1)[-1].lower()
    return extension in [ext.lower() for ext in allowed_extensions]


def guess_image_content_type(filename: str) -> Optional[str]:
    """Return the image/* content type for a file name, or None for non-images."""
    if not validate_file_extension(filename, ALLOWED_IMAGE_EXTENSIONS):
        return None
    content_type, _ = mimetypes.guess_type(filename)
    if content_type and content_type.startswith("image/"):
        return content_type
    # Older mimetypes tables miss webp/avif
    extension = filename.rsplit('.', 1)[-1].lower()
    return "image/jpeg" if extension == "jpg" else f"image/{extension}"
