# src/bartercoin/models/review.py
"""SQLAlchemy model for reviews users leave about each other."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bartercoin.db.session import Base
from bartercoin.db.time import utcnow
from bartercoin.models._ids import new_id
from bartercoin.models.profile import Profile


class Review(Base):
    """A 1-5 star rating with a comment, optionally tied to a trade or listing."""

    __tablename__ = "review"
    __table_args__ = (
        CheckConstraint("author_id <> target_user_id", name="ck_review_not_self"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    author_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("profile.id"), nullable=False, index=True
    )
    target_user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("profile.id"), nullable=False, index=True
    )
    trade_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("trade.id"), nullable=True
    )
    listing_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("listing.id"), nullable=True
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    author: Mapped[Profile] = relationship(foreign_keys=[author_id], lazy="joined")
