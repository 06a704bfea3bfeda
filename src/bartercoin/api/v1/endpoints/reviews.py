"""Review endpoints for the BarterCoin API."""

from fastapi import APIRouter, Query, Response, status

from bartercoin.models import Review
from bartercoin.schemas.common import Pagination
from bartercoin.schemas.review import (
    RatingSummaryResponse,
    ReviewCreate,
    ReviewPage,
    ReviewResponse,
    ReviewUpdate,
)

from ..dependencies import CurrentUserDep, ReviewServiceDep

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    payload: ReviewCreate,
    current_user: CurrentUserDep,
    reviews: ReviewServiceDep,
) -> Review:
    """Review another user, optionally about a shared trade or a listing."""
    return reviews.create(
        current_user.id,
        payload.target_user_id,
        payload.rating,
        payload.comment,
        trade_id=payload.trade_id,
        listing_id=payload.listing_id,
    )


@router.get("/given", response_model=ReviewPage)
def list_given_reviews(
    current_user: CurrentUserDep,
    reviews: ReviewServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ReviewPage:
    items, total = reviews.list_given(current_user.id, page=page, limit=limit)
    return ReviewPage(
        reviews=[ReviewResponse.model_validate(item) for item in items],
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/user/{user_id}", response_model=ReviewPage)
def list_user_reviews(
    user_id: str,
    reviews: ReviewServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ReviewPage:
    """Reviews a user has received, newest first, with their average rating."""
    items, total, average = reviews.list_received(user_id, page=page, limit=limit)
    return ReviewPage(
        reviews=[ReviewResponse.model_validate(item) for item in items],
        average_rating=average,
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/user/{user_id}/summary", response_model=RatingSummaryResponse)
def get_rating_summary(user_id: str, reviews: ReviewServiceDep) -> RatingSummaryResponse:
    return RatingSummaryResponse.model_validate(reviews.rating_summary(user_id))


@router.get("/{review_id}", response_model=ReviewResponse)
def get_review(review_id: str, reviews: ReviewServiceDep) -> Review:
    return reviews.get(review_id)


@router.patch("/{review_id}", response_model=ReviewResponse)
def update_review(
    review_id: str,
    payload: ReviewUpdate,
    current_user: CurrentUserDep,
    reviews: ReviewServiceDep,
) -> Review:
    return reviews.update(review_id, current_user.id, payload.model_dump(exclude_unset=True))


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(
    review_id: str,
    current_user: CurrentUserDep,
    reviews: ReviewServiceDep,
) -> Response:
    reviews.delete(review_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
