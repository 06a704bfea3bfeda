"""Coin balance and ledger endpoints for the BarterCoin API."""

from fastapi import APIRouter, Query

from bartercoin.core.settings import settings
from bartercoin.models import CoinTransaction
from bartercoin.schemas.coins import (
    BalanceResponse,
    CoinTransactionResponse,
    LedgerMovementResponse,
    SpendCoinsRequest,
    TransferCoinsRequest,
    TransferResponse,
)

from ..dependencies import CurrentUserDep, LedgerServiceDep

router = APIRouter(prefix="/coins", tags=["coins"])


@router.get("/balance", response_model=BalanceResponse)
def get_balance(current_user: CurrentUserDep, ledger: LedgerServiceDep) -> BalanceResponse:
    return BalanceResponse(balance=ledger.get_balance(current_user.id))


@router.get("/history", response_model=list[CoinTransactionResponse])
def get_history(
    current_user: CurrentUserDep,
    ledger: LedgerServiceDep,
    limit: int = Query(50, ge=1, le=settings.ledger_history_limit_max),
) -> list[CoinTransaction]:
    """Return the caller's ledger, newest first."""
    return ledger.get_history(current_user.id, limit)


@router.post("/spend", response_model=LedgerMovementResponse)
def spend_coins(
    payload: SpendCoinsRequest,
    current_user: CurrentUserDep,
    ledger: LedgerServiceDep,
) -> LedgerMovementResponse:
    entry = ledger.debit(current_user.id, payload.amount, payload.reason)
    return LedgerMovementResponse.model_validate(entry)


@router.post("/transfer", response_model=TransferResponse)
def transfer_coins(
    payload: TransferCoinsRequest,
    current_user: CurrentUserDep,
    ledger: LedgerServiceDep,
) -> TransferResponse:
    """Send coins to another user."""
    result = ledger.transfer(current_user.id, payload.to_user_id, payload.amount, payload.reason)
    return TransferResponse(
        balance=result.debit.balance,
        transactions=[
            CoinTransactionResponse.model_validate(result.debit.transaction),
            CoinTransactionResponse.model_validate(result.credit.transaction),
        ],
    )
