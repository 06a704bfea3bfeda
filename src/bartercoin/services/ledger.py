"""Coin ledger: balances and the signed transaction history behind them."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from bartercoin.core.errors import InsufficientFunds, InvalidAmount, NotFound, ValidationError
from bartercoin.db.session import atomic
from bartercoin.models import CoinTransaction, Profile

logger = logging.getLogger(__name__)

__all__ = ["LedgerService", "LedgerEntry", "TransferResult"]


@dataclass(frozen=True)
class LedgerEntry:
    """Balance after a single ledger movement and the row that recorded it."""

    balance: int
    transaction: CoinTransaction


@dataclass(frozen=True)
class TransferResult:
    debit: LedgerEntry
    credit: LedgerEntry


class LedgerService:
    """Apply credits and debits to profile balances.

    Every movement updates ``profile.coin_balance`` with a single relative
    UPDATE and appends a ``CoinTransaction`` in the same transaction, so the
    balance always equals the sum of the user's history. Debits are
    conditional on the current balance, which makes concurrent debits against
    one user linearizable at the database.

    Pass ``commit=False`` to compose several movements into a caller-owned
    transaction; the caller is then responsible for commit or rollback.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_balance(self, user_id: str) -> int:
        balance = self.db.execute(
            select(Profile.coin_balance).where(Profile.id == user_id)
        ).scalar_one_or_none()
        if balance is None:
            raise NotFound("User not found")
        return balance

    def get_history(self, user_id: str, limit: int = 50) -> list[CoinTransaction]:
        """Return the user's transactions, newest first."""
        self._require_profile(user_id)
        stmt = (
            select(CoinTransaction)
            .where(CoinTransaction.user_id == user_id)
            .order_by(CoinTransaction.created_at.desc(), CoinTransaction.id.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars())

    def credit(self, user_id: str, amount: int, reason: str, *, commit: bool = True) -> LedgerEntry:
        """Increase ``user_id``'s balance by ``amount``.

        Raises:
            InvalidAmount: If ``amount`` is not a positive integer.
            NotFound: If the profile does not exist.
        """
        _check_amount(amount)
        if not commit:
            return self._credit(user_id, amount, reason)
        with atomic(self.db):
            return self._credit(user_id, amount, reason)

    def debit(self, user_id: str, amount: int, reason: str, *, commit: bool = True) -> LedgerEntry:
        """Decrease ``user_id``'s balance by ``amount``.

        Raises:
            InvalidAmount: If ``amount`` is not a positive integer.
            InsufficientFunds: If the balance is lower than ``amount``.
            NotFound: If the profile does not exist.
        """
        _check_amount(amount)
        if not commit:
            return self._debit(user_id, amount, reason)
        with atomic(self.db):
            return self._debit(user_id, amount, reason)

    def transfer(
        self,
        from_user_id: str,
        to_user_id: str,
        amount: int,
        reason: str,
        *,
        commit: bool = True,
    ) -> TransferResult:
        """Move coins between two users; both halves apply or neither does."""
        _check_amount(amount)
        if from_user_id == to_user_id:
            raise ValidationError("Cannot transfer coins to yourself")
        self._require_profile(to_user_id)
        if not commit:
            return self._transfer(from_user_id, to_user_id, amount, reason)
        with atomic(self.db):
            return self._transfer(from_user_id, to_user_id, amount, reason)

    def _transfer(self, from_user_id: str, to_user_id: str, amount: int, reason: str) -> TransferResult:
        debit = self._debit(from_user_id, amount, f"Transfer to {to_user_id}: {reason}")
        credit = self._credit(to_user_id, amount, f"Transfer from {from_user_id}: {reason}")
        return TransferResult(debit=debit, credit=credit)

    def _credit(self, user_id: str, amount: int, reason: str) -> LedgerEntry:
        result = self.db.execute(
            update(Profile)
            .where(Profile.id == user_id)
            .values(coin_balance=Profile.coin_balance + amount)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount == 0:
            raise NotFound("User not found")
        entry = self._record(user_id, amount, reason)
        logger.info("Credited %d coins to %s (%s)", amount, user_id, reason)
        return entry

    def _debit(self, user_id: str, amount: int, reason: str) -> LedgerEntry:
        result = self.db.execute(
            update(Profile)
            .where(Profile.id == user_id, Profile.coin_balance >= amount)
            .values(coin_balance=Profile.coin_balance - amount)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount == 0:
            # Either the profile is missing or the guard rejected the debit.
            self._require_profile(user_id)
            raise InsufficientFunds("Insufficient coins balance")
        entry = self._record(user_id, -amount, reason)
        logger.info("Debited %d coins from %s (%s)", amount, user_id, reason)
        return entry

    def _record(self, user_id: str, signed_amount: int, reason: str) -> LedgerEntry:
        transaction = CoinTransaction(user_id=user_id, amount=signed_amount, reason=reason)
        self.db.add(transaction)
        self.db.flush()
        balance = self.db.execute(
            select(Profile.coin_balance).where(Profile.id == user_id)
        ).scalar_one()
        return LedgerEntry(balance=balance, transaction=transaction)

    def _require_profile(self, user_id: str) -> None:
        if self.db.get(Profile, user_id) is None:
            raise NotFound("User not found")


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmount("Amount must be greater than 0")
