# src/bartercoin/models/listing.py
"""SQLAlchemy model for tradeable listings."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bartercoin.db.session import Base
from bartercoin.db.time import utcnow
from bartercoin.models._ids import new_id
from bartercoin.models.profile import Profile

LISTING_STATUS_ACTIVE = "ACTIVE"
LISTING_STATUS_ARCHIVED = "ARCHIVED"
LISTING_STATUS_DELETED = "DELETED"


class Listing(Base):
    """An item or service offered by exactly one owner."""

    __tablename__ = "listing"
    __table_args__ = (
        CheckConstraint(
            "status IN ('ACTIVE', 'ARCHIVED', 'DELETED')",
            name="ck_listing_status",
        ),
        CheckConstraint("price >= 0", name="ck_listing_price_non_negative"),
        Index("ix_listing_status_created_at", "status", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    owner_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profile.id"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_service: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # ACTIVE -> ARCHIVED by the owner or a completed trade; DELETED is terminal.
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=LISTING_STATUS_ACTIVE)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    owner: Mapped[Profile] = relationship("Profile", lazy="joined")
