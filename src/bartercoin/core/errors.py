"""Domain error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; the FastAPI application maps each one to a
stable ``kind`` string and an HTTP status code (see ``bartercoin.main``).
"""

from __future__ import annotations

from fastapi import status


class MarketError(Exception):
    """Base class for every error the marketplace reports to callers."""

    kind: str = "error"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MarketError):
    """Malformed or missing input; always correctable by the caller."""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidAmount(ValidationError):
    kind = "invalid_amount"


class InvalidTrade(ValidationError):
    kind = "invalid_trade"


class InvalidMessage(ValidationError):
    kind = "invalid_message"


class Unauthenticated(MarketError):
    kind = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class InsufficientFunds(MarketError):
    kind = "insufficient_funds"
    status_code = status.HTTP_402_PAYMENT_REQUIRED


class Forbidden(MarketError):
    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(MarketError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransition(MarketError):
    kind = "invalid_transition"
    status_code = status.HTTP_409_CONFLICT


class Conflict(MarketError):
    """A concurrent mutation won the race for the same row."""

    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class InternalError(MarketError):
    kind = "internal_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


__all__ = [
    "MarketError",
    "ValidationError",
    "InvalidAmount",
    "InvalidTrade",
    "InvalidMessage",
    "Unauthenticated",
    "InsufficientFunds",
    "Forbidden",
    "NotFound",
    "InvalidTransition",
    "Conflict",
    "InternalError",
]
