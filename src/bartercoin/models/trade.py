# src/bartercoin/models/trade.py
"""SQLAlchemy model for trade negotiations."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bartercoin.db.session import Base
from bartercoin.db.time import utcnow
from bartercoin.models._ids import new_id

TRADE_STATUS_PENDING = "PENDING"
TRADE_STATUS_ACCEPTED = "ACCEPTED"
TRADE_STATUS_REJECTED = "REJECTED"
TRADE_STATUS_CANCELLED = "CANCELLED"
TRADE_STATUS_COMPLETED = "COMPLETED"

TERMINAL_TRADE_STATUSES = frozenset(
    {TRADE_STATUS_REJECTED, TRADE_STATUS_CANCELLED, TRADE_STATUS_COMPLETED}
)


class Trade(Base):
    """Proposal from an initiator for a responder's listing.

    The offer is another listing owned by the initiator, a coin amount, or
    both. Status moves PENDING -> ACCEPTED/REJECTED/CANCELLED and
    ACCEPTED -> COMPLETED/CANCELLED; terminal states never change again.
    """

    __tablename__ = "trade"
    __table_args__ = (
        CheckConstraint("initiator_id <> responder_id", name="ck_trade_distinct_parties"),
        CheckConstraint("coin_amount >= 0", name="ck_trade_coin_amount_non_negative"),
        CheckConstraint(
            "status IN ('PENDING', 'ACCEPTED', 'REJECTED', 'CANCELLED', 'COMPLETED')",
            name="ck_trade_status",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    initiator_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("profile.id"), nullable=False, index=True
    )
    responder_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("profile.id"), nullable=False, index=True
    )
    listing_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("listing.id"), nullable=False, index=True
    )
    proposed_listing_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("listing.id"), nullable=True
    )
    coin_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(String(16), nullable=False, default=TRADE_STATUS_PENDING)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_TRADE_STATUSES

    def is_party(self, user_id: str) -> bool:
        return user_id in (self.initiator_id, self.responder_id)

    def counterpart_of(self, user_id: str) -> str:
        return self.responder_id if user_id == self.initiator_id else self.initiator_id
