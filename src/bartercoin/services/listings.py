"""Listing store: create, browse and manage tradeable offers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from bartercoin.core.errors import Forbidden, InvalidTransition, NotFound, ValidationError
from bartercoin.db.session import atomic
from bartercoin.models import Listing
from bartercoin.models.listing import (
    LISTING_STATUS_ACTIVE,
    LISTING_STATUS_ARCHIVED,
    LISTING_STATUS_DELETED,
)

logger = logging.getLogger(__name__)

__all__ = ["ListingService", "validate_listing_fields"]

TITLE_LENGTH = (3, 255)
DESCRIPTION_LENGTH = (10, 2000)
EDITABLE_FIELDS = frozenset(
    {"title", "description", "category", "price", "image_url", "is_service"}
)
REQUIRED_FIELDS = ("title", "description", "category")


def validate_listing_fields(data: Mapping[str, Any]) -> None:
    """Check the listing bounds for whichever fields ``data`` carries.

    Raises:
        ValidationError: On the first field that is out of bounds.
    """
    if "title" in data:
        _check_length("title", data["title"], *TITLE_LENGTH)
    if "description" in data:
        _check_length("description", data["description"], *DESCRIPTION_LENGTH)
    if "category" in data:
        category = data["category"]
        if not isinstance(category, str) or not category.strip():
            raise ValidationError("category must not be empty")
    if "price" in data:
        price = data["price"]
        if isinstance(price, bool) or not isinstance(price, int) or price < 0:
            raise ValidationError("price must be a non-negative integer")
    if "is_service" in data and not isinstance(data["is_service"], bool):
        raise ValidationError("is_service must be true or false")


def _check_length(field: str, value: Any, low: int, high: int) -> None:
    if not isinstance(value, str) or not low <= len(value) <= high:
        raise ValidationError(f"{field} must be between {low} and {high} characters")


def _escape_like(text: str) -> str:
    """Make ``text`` match literally inside a LIKE pattern escaped with a backslash."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ListingService:
    """Ownership-checked operations over the ``listing`` table.

    Deleted listings are kept as rows with status DELETED and are treated as
    absent by every operation here.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, owner_id: str, data: Mapping[str, Any]) -> Listing:
        missing = [name for name in REQUIRED_FIELDS if name not in data]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        validate_listing_fields(data)

        fields = {key: value for key, value in data.items() if key in EDITABLE_FIELDS}
        with atomic(self.db):
            listing = Listing(owner_id=owner_id, status=LISTING_STATUS_ACTIVE, **fields)
            self.db.add(listing)
        self.db.refresh(listing)
        logger.info("Listing %s created by %s", listing.id, owner_id)
        return listing

    def get(self, listing_id: str) -> Listing:
        listing = self.db.get(Listing, listing_id)
        if listing is None or listing.status == LISTING_STATUS_DELETED:
            raise NotFound("Listing not found")
        return listing

    def update(self, listing_id: str, requester_id: str, patch: Mapping[str, Any]) -> Listing:
        listing = self._get_owned(listing_id, requester_id, action="update")
        unknown = set(patch) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        validate_listing_fields(patch)

        with atomic(self.db):
            for key, value in patch.items():
                setattr(listing, key, value)
        self.db.refresh(listing)
        return listing

    def archive(self, listing_id: str, requester_id: str) -> Listing:
        listing = self._get_owned(listing_id, requester_id, action="archive")
        if listing.status != LISTING_STATUS_ACTIVE:
            raise InvalidTransition("Only active listings can be archived")

        with atomic(self.db):
            listing.status = LISTING_STATUS_ARCHIVED
        self.db.refresh(listing)
        logger.info("Listing %s archived by %s", listing_id, requester_id)
        return listing

    def delete(self, listing_id: str, requester_id: str) -> None:
        listing = self._get_owned(listing_id, requester_id, action="delete")
        with atomic(self.db):
            listing.status = LISTING_STATUS_DELETED
        logger.info("Listing %s deleted by %s", listing_id, requester_id)

    def list(
        self,
        page: int = 1,
        limit: int = 10,
        category: str | None = None,
        search: str | None = None,
    ) -> tuple[list[Listing], int]:
        """Return one page of ACTIVE listings, newest first, and the total count."""
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive")

        conditions = [Listing.status == LISTING_STATUS_ACTIVE]
        if category:
            conditions.append(Listing.category == category)
        if search:
            pattern = f"%{_escape_like(search.lower())}%"
            conditions.append(
                or_(
                    func.lower(Listing.title).like(pattern, escape="\\"),
                    func.lower(Listing.description).like(pattern, escape="\\"),
                )
            )

        total = self.db.execute(
            select(func.count()).select_from(Listing).where(*conditions)
        ).scalar_one()
        stmt = (
            select(Listing)
            .where(*conditions)
            .order_by(Listing.created_at.desc(), Listing.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars()), total

    def list_for_owner(self, owner_id: str) -> list[Listing]:
        stmt = (
            select(Listing)
            .where(Listing.owner_id == owner_id, Listing.status != LISTING_STATUS_DELETED)
            .order_by(Listing.created_at.desc(), Listing.id.desc())
        )
        return list(self.db.execute(stmt).scalars())

    def _get_owned(self, listing_id: str, requester_id: str, *, action: str) -> Listing:
        listing = self.get(listing_id)
        if listing.owner_id != requester_id:
            raise Forbidden(f"Unauthorized to {action} this listing")
        return listing
