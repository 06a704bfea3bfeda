# src/bartercoin/services/__init__.py
"""Business logic services for the BarterCoin marketplace."""

from .ledger import LedgerService
from .listings import ListingService
from .messages import MessageService
from .notifications import NotificationService
from .profiles import ProfileService
from .reviews import ReviewService
from .trades import TradeService

__all__ = [
    "LedgerService",
    "ListingService",
    "MessageService",
    "NotificationService",
    "ProfileService",
    "ReviewService",
    "TradeService",
]
