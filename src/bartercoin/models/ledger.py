# src/bartercoin/models/ledger.py
"""Models for the append-only coin ledger."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bartercoin.db.session import Base
from bartercoin.db.time import utcnow
from bartercoin.models._ids import new_id


class CoinTransaction(Base):
    """Immutable signed movement of coins for one user.

    Positive amounts are credits, negative amounts are debits.
    """

    __tablename__ = "coin_transaction"
    __table_args__ = (
        Index("ix_coin_transaction_user_created", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("profile.id"), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
