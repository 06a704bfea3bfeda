"""Coin ledger Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BalanceResponse(BaseModel):
    balance: int


class CoinTransactionResponse(BaseModel):
    """A single signed ledger movement."""

    id: str
    user_id: str
    amount: int
    reason: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SpendCoinsRequest(BaseModel):
    amount: int = Field(..., ge=1)
    reason: str = Field(..., min_length=1, max_length=255)


class TransferCoinsRequest(BaseModel):
    to_user_id: str = Field(..., min_length=1)
    amount: int = Field(..., ge=1)
    reason: str = Field(..., min_length=1, max_length=255)


class LedgerMovementResponse(BaseModel):
    """Balance after a movement together with the recorded transaction."""

    balance: int
    transaction: CoinTransactionResponse

    model_config = ConfigDict(from_attributes=True)


class TransferResponse(BaseModel):
    """Sender's balance after a transfer and both sides of the movement."""

    balance: int
    transactions: list[CoinTransactionResponse]
