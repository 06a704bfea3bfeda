"""Listing-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import Pagination


class ListingCreate(BaseModel):
    """Schema for posting a new listing."""

    title: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=10, max_length=2000)
    category: str = Field(..., min_length=1, max_length=64)
    price: int = Field(0, ge=0, description="Asking price in BarterCoin")
    image_url: str | None = Field(None, max_length=2048)
    is_service: bool = False


class ListingUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""

    title: str | None = Field(None, min_length=3, max_length=255)
    description: str | None = Field(None, min_length=10, max_length=2000)
    category: str | None = Field(None, min_length=1, max_length=64)
    price: int | None = Field(None, ge=0)
    image_url: str | None = Field(None, max_length=2048)
    is_service: bool | None = None


class ListingOwner(BaseModel):
    id: str
    username: str
    avatar_url: str | None

    model_config = ConfigDict(from_attributes=True)


class ListingResponse(BaseModel):
    """Schema for listing information returned by the API."""

    id: str
    owner_id: str
    owner: ListingOwner | None = None
    title: str
    description: str
    category: str
    price: int
    image_url: str | None
    is_service: bool
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ListingPage(BaseModel):
    listings: list[ListingResponse]
    pagination: Pagination
