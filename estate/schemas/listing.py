"""Listing schemas."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from estate.utils.constants import MAX_IMAGES_PER_LISTING, MIN_IMAGES_PER_LISTING

ListingType = Literal["sale", "rent"]


class ListingBase(BaseModel):
    """Fields every listing carries. Wire names are camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: str
    description: str
    address: str
    type: ListingType
    bedrooms: int = Field(ge=0)
    bathrooms: int = Field(ge=0)
    regular_price: float = Field(ge=0)
    discount_price: float = Field(default=0, ge=0)
    offer: bool = False
    parking: bool = False
    furnished: bool = False
    image_urls: List[str] = Field(
        min_length=MIN_IMAGES_PER_LISTING,
        max_length=MAX_IMAGES_PER_LISTING,
    )


class ListingCreate(ListingBase):
    """Create payload. A client-supplied ``userRef`` is ignored."""


class ListingUpdate(BaseModel):
    """Partial update; only supplied fields are written."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    type: Optional[ListingType] = None
    bedrooms: Optional[int] = Field(default=None, ge=0)
    bathrooms: Optional[int] = Field(default=None, ge=0)
    regular_price: Optional[float] = Field(default=None, ge=0)
    discount_price: Optional[float] = Field(default=None, ge=0)
    offer: Optional[bool] = None
    parking: Optional[bool] = None
    furnished: Optional[bool] = None
    image_urls: Optional[List[str]] = Field(
        default=None,
        min_length=MIN_IMAGES_PER_LISTING,
        max_length=MAX_IMAGES_PER_LISTING,
    )


class ListingResponse(ListingBase):
    """Stored listing."""

    id: str = Field(..., alias="_id")
    user_ref: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
