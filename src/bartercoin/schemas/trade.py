"""Trade-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .coins import CoinTransactionResponse


class TradeCreate(BaseModel):
    """Schema for proposing a trade on another user's listing."""

    listing_id: str = Field(..., description="Listing being requested")
    responder_user_id: str = Field(..., description="Owner of the requested listing")
    message: str | None = Field(None, max_length=2000)
    proposed_listing_id: str | None = Field(None, description="Initiator's listing offered in exchange")
    proposed_coins: int = Field(0, ge=0, description="Coins offered in exchange")


class TradeDecision(BaseModel):
    decision: Literal["accept", "reject"]


class TradeResponse(BaseModel):
    """Schema for trade information returned by the API."""

    id: str
    initiator_id: str
    responder_id: str
    listing_id: str
    proposed_listing_id: str | None
    coin_amount: int
    message: str | None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CompletedTradeResponse(BaseModel):
    trade: TradeResponse
    ledger_entries: list[CoinTransactionResponse]

    model_config = ConfigDict(from_attributes=True)
