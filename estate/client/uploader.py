"""
Listing image uploads to object storage
Files go straight to the bucket; only the resulting URLs reach the API
"""

import asyncio
import io
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence
from urllib.parse import quote

import boto3
import structlog
from boto3.s3.transfer import TransferConfig

from estate.client.errors import ImageCountError, UploadError
from estate.config import Settings, get_settings
from estate.utils.validators import guess_image_content_type

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[str, float], None]

# Multipart above 8MB; listing images normally fit in one request
TRANSFER_CONFIG = TransferConfig(multipart_threshold=8 * 1024 * 1024, use_threads=True)


@dataclass
class ImageFile:
    """An image selected for upload."""

    name: str
    content: bytes

    @classmethod
    def from_path(cls, path) -> "ImageFile":
        path = Path(path)
        return cls(name=path.name, content=path.read_bytes())

    @property
    def size(self) -> int:
        return len(self.content)


class _ProgressTracker:
    """boto3 transfer callback turning byte counts into a percentage."""

    def __init__(self, filename: str, total: int, on_progress: Optional[ProgressCallback]):
        self.filename = filename
        self.total = total
        self.on_progress = on_progress
        self.transferred = 0
        self._lock = threading.Lock()

    def __call__(self, bytes_amount: int):
        with self._lock:
            self.transferred += bytes_amount
            percent = (self.transferred / self.total) * 100 if self.total else 100.0
        logger.debug("image_upload_progress", filename=self.filename, percent=round(percent, 1))
        if self.on_progress:
            self.on_progress(self.filename, percent)


class ImageUploader:
    """
    Upload a batch of listing images concurrently.

    A batch is all-or-nothing: if any file fails, the caller gets a single
    UploadError and none of the URLs.
    """

    BATCH_FAILED_MESSAGE = "Image upload failed (2 MB max per image)"

    def __init__(self, settings: Optional[Settings] = None, s3_client=None):
        self.settings = settings or get_settings()
        self.bucket = self.settings.S3_BUCKET_NAME
        self.s3_client = s3_client or boto3.client(
            "s3",
            region_name=self.settings.AWS_REGION,
            endpoint_url=self.settings.S3_ENDPOINT_URL,
            aws_access_key_id=self.settings.AWS_ACCESS_KEY_ID or None,
            aws_secret_access_key=self.settings.AWS_SECRET_ACCESS_KEY or None,
        )

    def check_batch_size(self, file_count: int, existing_count: int = 0):
        """Refuse an empty batch or one that would exceed the per-listing limit."""
        limit = self.settings.MAX_IMAGES_PER_LISTING
        if file_count < 1 or file_count + existing_count > limit:
            raise ImageCountError(f"You can only upload {limit} images per listing")

    async def upload_images(
        self,
        files: Sequence[ImageFile],
        existing_count: int = 0,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[str]:
        """
        Upload ``files`` and return their URLs in the order given.

        Args:
            files: images to upload
            existing_count: images already attached to the listing
            on_progress: called with ``(filename, percent)`` per file

        Raises:
            ImageCountError: before any network call, when the batch is empty
                or the listing would end up with too many images
            UploadError: when any single upload fails
        """
        self.check_batch_size(len(files), existing_count)

        tasks = [asyncio.to_thread(self.store_image, image, on_progress) for image in files]
        try:
            urls = await asyncio.gather(*tasks)
        except Exception as e:
            logger.warning("image_batch_failed", files=len(files), error=str(e))
            raise UploadError(self.BATCH_FAILED_MESSAGE) from e

        logger.info("image_batch_uploaded", files=len(urls))
        return list(urls)

    def store_image(self, image: ImageFile, on_progress: Optional[ProgressCallback] = None) -> str:
        """Upload one image and return its public URL."""
        if image.size > self.settings.MAX_IMAGE_SIZE:
            raise ValueError(f"{image.name} exceeds {self.settings.MAX_IMAGE_SIZE} bytes")

        content_type = guess_image_content_type(image.name)
        if content_type is None:
            raise ValueError(f"{image.name} is not an image")

        # Timestamp prefix keeps same-named files apart
        key = f"{int(time.time() * 1000)}{image.name}"
        tracker = _ProgressTracker(image.name, image.size, on_progress)

        self.s3_client.upload_fileobj(
            io.BytesIO(image.content),
            self.bucket,
            key,
            ExtraArgs={"ContentType": content_type},
            Callback=tracker,
            Config=TRANSFER_CONFIG,
        )
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        quoted = quote(key)
        if self.settings.S3_PUBLIC_URL:
            return f"{self.settings.S3_PUBLIC_URL.rstrip('/')}/{quoted}"
        if self.settings.S3_ENDPOINT_URL:
            return f"{self.settings.S3_ENDPOINT_URL.rstrip('/')}/{self.bucket}/{quoted}"
        return f"https://{self.bucket}.s3.{self.settings.AWS_REGION}.amazonaws.com/{quoted}"
