"""Review-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import Pagination


class ReviewCreate(BaseModel):
    target_user_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=5, max_length=1000)
    trade_id: str | None = None
    listing_id: str | None = None


class ReviewUpdate(BaseModel):
    rating: int | None = Field(None, ge=1, le=5)
    comment: str | None = Field(None, min_length=5, max_length=1000)


class ReviewAuthor(BaseModel):
    id: str
    username: str
    display_name: str | None
    avatar_url: str | None

    model_config = ConfigDict(from_attributes=True)


class ReviewResponse(BaseModel):
    id: str
    author_id: str
    target_user_id: str
    trade_id: str | None
    listing_id: str | None
    rating: int
    comment: str
    author: ReviewAuthor
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewPage(BaseModel):
    """A page of reviews, with the target's average when listing received reviews."""

    reviews: list[ReviewResponse]
    average_rating: float | None = None
    pagination: Pagination


class RatingSummaryResponse(BaseModel):
    average_rating: float
    total_reviews: int
    breakdown: dict[int, int]

    model_config = ConfigDict(from_attributes=True)
