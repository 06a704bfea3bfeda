"""Trade negotiation engine.

Trades move through ``PENDING -> ACCEPTED/REJECTED/CANCELLED`` and
``ACCEPTED -> COMPLETED/CANCELLED``. Completion is the only step with ledger
effects: the coin leg (initiator pays the listing owner), archiving the
traded listings and the status change commit together or not at all.
Notifications are sent after the commit and never undo it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from bartercoin.core.errors import (
    Conflict,
    Forbidden,
    InvalidTrade,
    InvalidTransition,
    NotFound,
)
from bartercoin.db.session import atomic
from bartercoin.models import CoinTransaction, Listing, Trade
from bartercoin.models.listing import LISTING_STATUS_ACTIVE, LISTING_STATUS_ARCHIVED, LISTING_STATUS_DELETED
from bartercoin.models.notification import (
    NOTIFICATION_TRADE_ACCEPTED,
    NOTIFICATION_TRADE_CANCELLED,
    NOTIFICATION_TRADE_COMPLETED,
    NOTIFICATION_TRADE_OFFER,
    NOTIFICATION_TRADE_REJECTED,
)
from bartercoin.models.trade import (
    TRADE_STATUS_ACCEPTED,
    TRADE_STATUS_CANCELLED,
    TRADE_STATUS_COMPLETED,
    TRADE_STATUS_PENDING,
    TRADE_STATUS_REJECTED,
)
from bartercoin.services.ledger import LedgerService
from bartercoin.services.notifications import NotificationService

logger = logging.getLogger(__name__)

__all__ = ["TradeService", "TradeOffer", "CompletedTrade", "DECISION_ACCEPT", "DECISION_REJECT"]

DECISION_ACCEPT = "accept"
DECISION_REJECT = "reject"

TradeDirection = Literal["incoming", "outgoing"]


@dataclass(frozen=True)
class TradeOffer:
    """What the initiator puts on the table."""

    proposed_listing_id: str | None = None
    coin_amount: int = 0
    message: str | None = None


@dataclass
class CompletedTrade:
    trade: Trade
    ledger_entries: list[CoinTransaction] = field(default_factory=list)


class TradeService:
    """Orchestrates trades across the listing, ledger and notification stores."""

    def __init__(
        self,
        db: Session,
        ledger: LedgerService | None = None,
        notifications: NotificationService | None = None,
    ) -> None:
        self.db = db
        self.ledger = ledger or LedgerService(db)
        self.notifications = notifications or NotificationService(db)

    def propose(
        self,
        initiator_id: str,
        listing_id: str,
        responder_id: str,
        offer: TradeOffer | None = None,
    ) -> Trade:
        """Open a PENDING trade for ``listing_id`` and notify the responder.

        Raises:
            InvalidTrade: Self-trade, inactive listing, responder who does
                not own the listing, or an unusable proposed listing.
            NotFound: If the listing does not exist.
        """
        offer = offer or TradeOffer()
        if initiator_id == responder_id:
            raise InvalidTrade("Cannot trade with yourself")
        if offer.coin_amount < 0:
            raise InvalidTrade("Coin amount cannot be negative")

        listing = self._get_listing(listing_id)
        if listing.status != LISTING_STATUS_ACTIVE:
            raise InvalidTrade("Listing is not active")
        if listing.owner_id != responder_id:
            raise InvalidTrade("Responder does not own this listing")

        if offer.proposed_listing_id is not None:
            proposed = self._get_listing(offer.proposed_listing_id, label="Proposed listing")
            if proposed.owner_id != initiator_id:
                raise InvalidTrade("You can only propose your own listings")
            if proposed.status != LISTING_STATUS_ACTIVE:
                raise InvalidTrade("Proposed listing is not active")

        with atomic(self.db):
            trade = Trade(
                initiator_id=initiator_id,
                responder_id=responder_id,
                listing_id=listing.id,
                proposed_listing_id=offer.proposed_listing_id,
                coin_amount=offer.coin_amount,
                message=offer.message,
                status=TRADE_STATUS_PENDING,
            )
            self.db.add(trade)
        self.db.refresh(trade)
        logger.info("Trade %s proposed by %s on listing %s", trade.id, initiator_id, listing.id)

        self.notifications.emit(
            responder_id,
            NOTIFICATION_TRADE_OFFER,
            "New trade offer",
            f'You received a trade offer for "{listing.title}"',
            related_id=trade.id,
            related_type="trade",
        )
        return trade

    def respond(self, trade_id: str, responder_id: str, decision: str) -> Trade:
        """Accept or reject a PENDING trade as its responder."""
        if decision not in (DECISION_ACCEPT, DECISION_REJECT):
            raise InvalidTrade("Decision must be 'accept' or 'reject'")

        trade = self._get_trade(trade_id)
        if trade.responder_id != responder_id:
            raise Forbidden("Only the responder can respond to this trade")

        accepted = decision == DECISION_ACCEPT
        target = TRADE_STATUS_ACCEPTED if accepted else TRADE_STATUS_REJECTED
        with atomic(self.db):
            self._transition(trade, (TRADE_STATUS_PENDING,), target)
        self.db.refresh(trade)

        if accepted:
            self.notifications.emit(
                trade.initiator_id,
                NOTIFICATION_TRADE_ACCEPTED,
                "Trade accepted",
                "Your trade offer was accepted",
                related_id=trade.id,
                related_type="trade",
            )
        else:
            self.notifications.emit(
                trade.initiator_id,
                NOTIFICATION_TRADE_REJECTED,
                "Trade rejected",
                "Your trade offer was rejected",
                related_id=trade.id,
                related_type="trade",
            )
        return trade

    def complete(self, trade_id: str, caller_id: str) -> CompletedTrade:
        """Settle an ACCEPTED trade.

        The coin leg, listing archival and status change share one
        transaction; on any failure the trade stays ACCEPTED and no ledger
        rows survive.
        """
        trade = self._get_trade(trade_id)
        if not trade.is_party(caller_id):
            raise Forbidden("Unauthorized to complete this trade")
        if trade.status != TRADE_STATUS_ACCEPTED:
            raise InvalidTransition("Trade must be accepted before completing")

        listing = self.db.get(Listing, trade.listing_id)
        if listing is None or listing.status == LISTING_STATUS_DELETED:
            raise InvalidTransition("Listing is no longer available")

        entries: list[CoinTransaction] = []
        with atomic(self.db):
            if trade.coin_amount > 0:
                reason = f"Trade {trade.id}"
                debit = self.ledger.debit(
                    trade.initiator_id, trade.coin_amount, reason, commit=False
                )
                credit = self.ledger.credit(
                    listing.owner_id, trade.coin_amount, reason, commit=False
                )
                entries = [debit.transaction, credit.transaction]

            self._archive(trade.listing_id)
            if trade.proposed_listing_id is not None:
                self._archive(trade.proposed_listing_id)
            self._transition(trade, (TRADE_STATUS_ACCEPTED,), TRADE_STATUS_COMPLETED)
        self.db.refresh(trade)
        logger.info("Trade %s completed by %s (%d coins)", trade.id, caller_id, trade.coin_amount)

        for user_id in (trade.initiator_id, trade.responder_id):
            self.notifications.emit(
                user_id,
                NOTIFICATION_TRADE_COMPLETED,
                "Trade completed",
                f'Your trade for "{listing.title}" is complete',
                related_id=trade.id,
                related_type="trade",
            )
        return CompletedTrade(trade=trade, ledger_entries=entries)

    def cancel(self, trade_id: str, caller_id: str) -> Trade:
        """Withdraw a PENDING or ACCEPTED trade as either party."""
        trade = self._get_trade(trade_id)
        if not trade.is_party(caller_id):
            raise Forbidden("Unauthorized to cancel this trade")

        with atomic(self.db):
            self._transition(
                trade,
                (TRADE_STATUS_PENDING, TRADE_STATUS_ACCEPTED),
                TRADE_STATUS_CANCELLED,
            )
        self.db.refresh(trade)

        self.notifications.emit(
            trade.counterpart_of(caller_id),
            NOTIFICATION_TRADE_CANCELLED,
            "Trade cancelled",
            "A trade you were part of was cancelled",
            related_id=trade.id,
            related_type="trade",
        )
        return trade

    def get(self, trade_id: str, caller_id: str) -> Trade:
        trade = self._get_trade(trade_id)
        if not trade.is_party(caller_id):
            raise Forbidden("Unauthorized to view this trade")
        return trade

    def list_for_user(self, user_id: str, direction: TradeDirection = "incoming") -> list[Trade]:
        column = Trade.responder_id if direction == "incoming" else Trade.initiator_id
        stmt = (
            select(Trade)
            .where(column == user_id)
            .order_by(Trade.created_at.desc(), Trade.id.desc())
        )
        return list(self.db.execute(stmt).scalars())

    def _transition(self, trade: Trade, allowed: tuple[str, ...], target: str) -> None:
        if trade.status not in allowed:
            raise InvalidTransition(f"Cannot move trade from {trade.status} to {target}")
        previous = trade.status
        result = self.db.execute(
            update(Trade)
            .where(Trade.id == trade.id, Trade.status.in_(allowed))
            .values(status=target)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount == 0:
            raise Conflict("Trade was modified concurrently")
        logger.info("Trade %s: %s -> %s", trade.id, previous, target)
        trade.status = target

    def _archive(self, listing_id: str) -> None:
        self.db.execute(
            update(Listing)
            .where(Listing.id == listing_id, Listing.status == LISTING_STATUS_ACTIVE)
            .values(status=LISTING_STATUS_ARCHIVED)
            .execution_options(synchronize_session="fetch")
        )

    def _get_trade(self, trade_id: str) -> Trade:
        trade = self.db.get(Trade, trade_id)
        if trade is None:
            raise NotFound("Trade not found")
        return trade

    def _get_listing(self, listing_id: str, label: str = "Listing") -> Listing:
        listing = self.db.get(Listing, listing_id)
        if listing is None or listing.status == LISTING_STATUS_DELETED:
            raise NotFound(f"{label} not found")
        return listing
