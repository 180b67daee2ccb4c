"""Listing form state and pre-submit checks."""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from estate.client.errors import FormError
from estate.schemas.listing import ListingType
from estate.utils.constants import (
    LISTING_NAME_MAX_LENGTH,
    LISTING_NAME_MIN_LENGTH,
    MAX_ROOMS,
    MIN_REGULAR_PRICE,
    MIN_ROOMS,
)


class _ListingInputs(BaseModel):
    """Per-field bounds of the listing form inputs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: str = Field(min_length=LISTING_NAME_MIN_LENGTH, max_length=LISTING_NAME_MAX_LENGTH)
    description: str = Field(min_length=1)
    address: str = Field(min_length=1)
    bedrooms: int = Field(ge=MIN_ROOMS, le=MAX_ROOMS)
    bathrooms: int = Field(ge=MIN_ROOMS, le=MAX_ROOMS)
    regular_price: float = Field(ge=MIN_REGULAR_PRICE)
    discount_price: float = Field(ge=0)


class ListingForm(BaseModel):
    """
    Editable listing state used by the create and update flows.

    Defaults match a blank create form. Values are only checked when the
    form is submitted, like browser form inputs.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: str = ""
    description: str = ""
    address: str = ""
    type: ListingType = "rent"
    bedrooms: int = 1
    bathrooms: int = 1
    regular_price: float = 50
    discount_price: float = 0
    offer: bool = False
    parking: bool = False
    furnished: bool = False
    image_urls: List[str] = Field(default_factory=list)

    @classmethod
    def from_listing(cls, listing: Dict[str, Any]) -> "ListingForm":
        """Prefill the form from a listing returned by the API."""
        return cls.model_validate(listing)

    def add_image_urls(self, urls: List[str]):
        self.image_urls = self.image_urls + list(urls)

    def remove_image(self, index: int):
        """Drop the image at ``index``; the first remaining one is the cover."""
        self.image_urls = [url for i, url in enumerate(self.image_urls) if i != index]

    def validate_for_submit(self):
        """
        Check the form before it is sent.

        Raises:
            FormError: out-of-range input, no image, or a discount above the
                regular price on an offer
        """
        try:
            _ListingInputs.model_validate(self.model_dump())
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            raise FormError(f"{field}: {first['msg']}")

        if len(self.image_urls) < 1:
            raise FormError("You must upload at least one image")

        if self.offer and self.discount_price > self.regular_price:
            raise FormError("Discount price must be lower than regular price")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
