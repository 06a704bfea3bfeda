# src/bartercoin/models/conversation.py
"""Models describing direct messages and per-pair inbox rows."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from bartercoin.db.session import Base
from bartercoin.db.time import utcnow
from bartercoin.models._ids import new_id


class Message(Base):
    """Plain-text message between two profiles; content is never edited."""

    __tablename__ = "message"
    __table_args__ = (
        Index("ix_message_pair_created", "sender_id", "receiver_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    sender_id: Mapped[str] = mapped_column(String(64), ForeignKey("profile.id"), nullable=False)
    receiver_id: Mapped[str] = mapped_column(String(64), ForeignKey("profile.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Read receipts are the only mutable columns; set by the receiver.
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class Conversation(Base):
    """Inbox summary owned by ``user_id`` about ``other_user_id``.

    Every pair has two rows, one per direction, and both are rewritten on
    each message.
    """

    __tablename__ = "conversation"
    __table_args__ = (
        UniqueConstraint("user_id", "other_user_id", name="uq_conversation_pair"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("profile.id"), nullable=False, index=True
    )
    other_user_id: Mapped[str] = mapped_column(String(64), ForeignKey("profile.id"), nullable=False)
    last_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_message_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )
