"""Create and update listing flows."""

from typing import Any, Dict, List, Optional, Sequence

import structlog

from estate.client.api_client import ApiClient
from estate.client.errors import ClientError
from estate.client.forms import ListingForm
from estate.client.state import UserState
from estate.client.uploader import ImageFile, ImageUploader, ProgressCallback

logger = structlog.get_logger(__name__)


class ListingEditor:
    """
    Drives one listing form: image uploads into form state, then submit.

    Without ``listing_id`` the editor creates a listing; after ``load`` it
    updates the loaded one.
    """

    def __init__(
        self,
        api: ApiClient,
        uploader: ImageUploader,
        user_state: UserState,
        form: Optional[ListingForm] = None,
    ):
        self.api = api
        self.uploader = uploader
        self.user_state = user_state
        self.form = form or ListingForm()
        self.listing_id: Optional[str] = None
        self.uploading = False
        self.image_upload_error: Optional[str] = None
        self.error: Optional[str] = None

    async def load(self, listing_id: str):
        """Prefill the form from an existing listing."""
        listing = await self.api.get_listing(listing_id)
        self.form = ListingForm.from_listing(listing)
        self.listing_id = listing_id

    async def upload_images(
        self,
        files: Sequence[ImageFile],
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[str]:
        """Upload a batch and append the URLs; on failure the form is unchanged."""
        self.uploading = True
        self.image_upload_error = None
        try:
            urls = await self.uploader.upload_images(
                files,
                existing_count=len(self.form.image_urls),
                on_progress=on_progress,
            )
        except ClientError as e:
            self.image_upload_error = str(e)
            raise
        finally:
            self.uploading = False

        self.form.add_image_urls(urls)
        return urls

    async def submit(self) -> Dict[str, Any]:
        """Validate the form and send it; returns the stored listing."""
        user = self.user_state.require_user()
        self.error = None
        try:
            self.form.validate_for_submit()
            payload = self.form.to_payload()
            payload["userRef"] = user["_id"]
            if self.listing_id:
                listing = await self.api.update_listing(self.listing_id, payload)
            else:
                listing = await self.api.create_listing(payload)
        except ClientError as e:
            self.error = str(e)
            raise

        logger.info("listing_submitted", listing_id=listing["_id"], update=bool(self.listing_id))
        return listing
