"""Version 1 API endpoints."""

from .endpoints import (
    coins_router,
    listings_router,
    messages_router,
    notifications_router,
    profiles_router,
    reviews_router,
    trades_router,
)

__all__ = [
    "coins_router",
    "listings_router",
    "messages_router",
    "notifications_router",
    "profiles_router",
    "reviews_router",
    "trades_router",
]
