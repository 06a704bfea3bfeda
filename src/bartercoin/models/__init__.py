# src/bartercoin/models/__init__.py
"""SQLAlchemy models for the BarterCoin marketplace."""

from .conversation import Conversation, Message
from .ledger import CoinTransaction
from .listing import Listing
from .notification import Notification, NotificationPreference
from .profile import Profile
from .review import Review
from .trade import Trade

__all__ = [
    "Conversation", "Message",
    "CoinTransaction",
    "Listing",
    "Notification", "NotificationPreference",
    "Profile",
    "Review",
    "Trade",
]
