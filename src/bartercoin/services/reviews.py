"""Reviews between users and the profile rating derived from them."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from bartercoin.core.errors import Forbidden, NotFound, ValidationError
from bartercoin.db.session import atomic
from bartercoin.models import Listing, Profile, Review, Trade
from bartercoin.models.listing import LISTING_STATUS_DELETED
from bartercoin.models.notification import NOTIFICATION_REVIEW
from bartercoin.services.notifications import NotificationService

logger = logging.getLogger(__name__)

__all__ = ["ReviewService", "RatingSummary"]

DEFAULT_RATING = 5.0
RATING_RANGE = (1, 5)
COMMENT_LENGTH = (5, 1000)
EDITABLE_FIELDS = frozenset({"rating", "comment"})
PREVIEW_LENGTH = 50


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float
    total_reviews: int
    breakdown: dict[int, int]


def _check_rating(value: Any) -> int:
    low, high = RATING_RANGE
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ValidationError(f"rating must be an integer between {low} and {high}")
    return value


def _clean_comment(value: Any) -> str:
    low, high = COMMENT_LENGTH
    text = value.strip() if isinstance(value, str) else ""
    if not low <= len(text) <= high:
        raise ValidationError(f"comment must be between {low} and {high} characters")
    return text


class ReviewService:
    """Create and manage reviews, keeping ``Profile.rating`` in step.

    Every write recomputes the target's average in the same transaction.
    """

    def __init__(self, db: Session, notifications: NotificationService | None = None) -> None:
        self.db = db
        self.notifications = notifications or NotificationService(db)

    def create(
        self,
        author_id: str,
        target_user_id: str,
        rating: int,
        comment: str,
        trade_id: str | None = None,
        listing_id: str | None = None,
    ) -> Review:
        if author_id == target_user_id:
            raise ValidationError("Cannot review yourself")
        rating = _check_rating(rating)
        text = _clean_comment(comment)

        author = self.db.get(Profile, author_id)
        if author is None or self.db.get(Profile, target_user_id) is None:
            raise NotFound("User not found")
        if trade_id is not None:
            trade = self.db.get(Trade, trade_id)
            if trade is None:
                raise NotFound("Trade not found")
            if not (trade.is_party(author_id) and trade.is_party(target_user_id)):
                raise ValidationError("Trade does not involve both users")
        if listing_id is not None:
            listing = self.db.get(Listing, listing_id)
            if listing is None or listing.status == LISTING_STATUS_DELETED:
                raise NotFound("Listing not found")

        with atomic(self.db):
            review = Review(
                author_id=author_id,
                target_user_id=target_user_id,
                trade_id=trade_id,
                listing_id=listing_id,
                rating=rating,
                comment=text,
            )
            self.db.add(review)
            self.db.flush()
            self._recalculate_rating(target_user_id)
        self.db.refresh(review)
        logger.info("Review %s: %s rated %s %d", review.id, author_id, target_user_id, rating)

        preview = text if len(text) <= PREVIEW_LENGTH else f"{text[:PREVIEW_LENGTH]}..."
        self.notifications.emit(
            target_user_id,
            NOTIFICATION_REVIEW,
            "New review",
            f'{author.username} left you a {rating}-star review: "{preview}"',
            related_id=review.id,
            related_type="review",
        )
        return review

    def get(self, review_id: str) -> Review:
        review = self.db.get(Review, review_id)
        if review is None:
            raise NotFound("Review not found")
        return review

    def list_received(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Review], int, float]:
        """Return one page of reviews about ``user_id``, the total and their average."""
        profile = self.db.get(Profile, user_id)
        if profile is None:
            raise NotFound("User not found")
        items, total = self._page(Review.target_user_id == user_id, page, limit)
        return items, total, profile.rating

    def list_given(self, author_id: str, page: int = 1, limit: int = 10) -> tuple[list[Review], int]:
        return self._page(Review.author_id == author_id, page, limit)

    def update(self, review_id: str, author_id: str, patch: Mapping[str, Any]) -> Review:
        unknown = set(patch) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        review = self._get_authored(review_id, author_id)
        values: dict[str, Any] = {}
        if "rating" in patch:
            values["rating"] = _check_rating(patch["rating"])
        if "comment" in patch:
            values["comment"] = _clean_comment(patch["comment"])

        with atomic(self.db):
            for key, value in values.items():
                setattr(review, key, value)
            self.db.flush()
            if "rating" in values:
                self._recalculate_rating(review.target_user_id)
        self.db.refresh(review)
        return review

    def delete(self, review_id: str, author_id: str) -> None:
        review = self._get_authored(review_id, author_id)
        target_user_id = review.target_user_id
        with atomic(self.db):
            self.db.delete(review)
            self.db.flush()
            self._recalculate_rating(target_user_id)
        logger.info("Review %s deleted by %s", review_id, author_id)

    def rating_summary(self, user_id: str) -> RatingSummary:
        """Return the average rating and how many reviews gave each star count."""
        profile = self.db.get(Profile, user_id)
        if profile is None:
            raise NotFound("User not found")
        rows = self.db.execute(
            select(Review.rating, func.count())
            .where(Review.target_user_id == user_id)
            .group_by(Review.rating)
        ).all()
        breakdown = dict.fromkeys(range(RATING_RANGE[0], RATING_RANGE[1] + 1), 0)
        for stars, count in rows:
            breakdown[stars] = count
        return RatingSummary(
            average_rating=profile.rating,
            total_reviews=sum(breakdown.values()),
            breakdown=breakdown,
        )

    def _page(self, condition, page: int, limit: int) -> tuple[list[Review], int]:
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive")
        total = self.db.execute(
            select(func.count()).select_from(Review).where(condition)
        ).scalar_one()
        stmt = (
            select(Review)
            .where(condition)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars()), total

    def _recalculate_rating(self, user_id: str) -> float:
        average = self.db.execute(
            select(func.avg(Review.rating)).where(Review.target_user_id == user_id)
        ).scalar_one()
        rating = round(float(average), 2) if average is not None else DEFAULT_RATING
        self.db.execute(
            update(Profile)
            .where(Profile.id == user_id)
            .values(rating=rating)
            .execution_options(synchronize_session="fetch")
        )
        return rating

    def _get_authored(self, review_id: str, author_id: str) -> Review:
        review = self.get(review_id)
        if review.author_id != author_id:
            raise Forbidden("You can only modify your own reviews")
        return review
