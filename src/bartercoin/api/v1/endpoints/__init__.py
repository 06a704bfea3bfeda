# src/bartercoin/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .coins import router as coins_router
from .listings import router as listings_router
from .messages import router as messages_router
from .notifications import router as notifications_router
from .profiles import router as profiles_router
from .reviews import router as reviews_router
from .trades import router as trades_router

__all__ = [
    "coins_router",
    "listings_router",
    "messages_router",
    "notifications_router",
    "profiles_router",
    "reviews_router",
    "trades_router",
]
