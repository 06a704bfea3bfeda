# src/bartercoin/models/profile.py
"""SQLAlchemy model for marketplace profiles."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bartercoin.db.session import Base
from bartercoin.db.time import utcnow


class Profile(Base):
    """Public identity plus the coin balance of a registered user.

    The primary key is the subject issued by the external identity provider.
    ``coin_balance`` is only ever changed by the ledger service, which keeps
    it equal to the sum of the user's coin transactions.
    """

    __tablename__ = "profile"
    __table_args__ = (
        CheckConstraint("coin_balance >= 0", name="ck_profile_coin_balance_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    coin_balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Average review rating, 5.0 until the first review arrives
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=5.0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
