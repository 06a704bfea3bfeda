"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .coins import (
    BalanceResponse,
    CoinTransactionResponse,
    SpendCoinsRequest,
    TransferCoinsRequest,
    TransferResponse,
)
from .common import Pagination
from .listing import ListingCreate, ListingPage, ListingResponse, ListingUpdate
from .message import ConversationResponse, MessageCreate, MessageResponse
from .notification import (
    NotificationPage,
    NotificationPreferenceResponse,
    NotificationPreferenceUpdate,
    NotificationResponse,
)
from .profile import ProfileCreate, ProfileResponse, ProfileUpdate, PublicProfile
from .review import (
    RatingSummaryResponse,
    ReviewCreate,
    ReviewPage,
    ReviewResponse,
    ReviewUpdate,
)
from .trade import CompletedTradeResponse, TradeCreate, TradeDecision, TradeResponse

__all__ = [
    "BalanceResponse", "CoinTransactionResponse", "SpendCoinsRequest", "TransferCoinsRequest",
    "TransferResponse",
    "Pagination",
    "ListingCreate", "ListingPage", "ListingResponse", "ListingUpdate",
    "ConversationResponse", "MessageCreate", "MessageResponse",
    "NotificationPage", "NotificationPreferenceResponse", "NotificationPreferenceUpdate",
    "NotificationResponse",
    "ProfileCreate", "ProfileResponse", "ProfileUpdate", "PublicProfile",
    "RatingSummaryResponse", "ReviewCreate", "ReviewPage", "ReviewResponse", "ReviewUpdate",
    "CompletedTradeResponse", "TradeCreate", "TradeDecision", "TradeResponse",
]
