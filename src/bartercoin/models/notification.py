# src/bartercoin/models/notification.py
"""Models for user notifications and delivery preferences."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bartercoin.db.session import Base
from bartercoin.db.time import utcnow
from bartercoin.models._ids import new_id

NOTIFICATION_TRADE_OFFER = "trade_offer"
NOTIFICATION_TRADE_ACCEPTED = "trade_accepted"
NOTIFICATION_TRADE_REJECTED = "trade_rejected"
NOTIFICATION_TRADE_COMPLETED = "trade_completed"
NOTIFICATION_TRADE_CANCELLED = "trade_cancelled"
NOTIFICATION_MESSAGE = "message"
NOTIFICATION_REVIEW = "review"

TRADE_NOTIFICATION_TYPES = frozenset(
    {
        NOTIFICATION_TRADE_OFFER,
        NOTIFICATION_TRADE_ACCEPTED,
        NOTIFICATION_TRADE_REJECTED,
        NOTIFICATION_TRADE_COMPLETED,
        NOTIFICATION_TRADE_CANCELLED,
    }
)


class Notification(Base):
    """System-generated notice for a single user."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_read", "user_id", "is_read"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("profile.id"), nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    related_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    related_type: Mapped[str | None] = mapped_column(String(32), nullable=True)

    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class NotificationPreference(Base):
    """Per-user switches for in-app notification categories."""

    __tablename__ = "notification_preference"

    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profile.id", ondelete="CASCADE"),
        primary_key=True,
    )
    in_app_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    trade_updates: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    messages: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    reviews: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )
