"""Trade negotiation endpoints for the BarterCoin API."""

from typing import Literal

from fastapi import APIRouter, Query, status

from bartercoin.models import Trade
from bartercoin.schemas.trade import CompletedTradeResponse, TradeCreate, TradeDecision, TradeResponse
from bartercoin.services.trades import TradeOffer

from ..dependencies import CurrentUserDep, TradeServiceDep

router = APIRouter(prefix="/trades", tags=["trades"])


@router.post("", response_model=TradeResponse, status_code=status.HTTP_201_CREATED)
def propose_trade(
    payload: TradeCreate,
    current_user: CurrentUserDep,
    trades: TradeServiceDep,
) -> Trade:
    """Propose a trade on another user's listing."""
    offer = TradeOffer(
        proposed_listing_id=payload.proposed_listing_id,
        coin_amount=payload.proposed_coins,
        message=payload.message,
    )
    return trades.propose(current_user.id, payload.listing_id, payload.responder_user_id, offer)


@router.get("", response_model=list[TradeResponse])
def list_trades(
    current_user: CurrentUserDep,
    trades: TradeServiceDep,
    direction: Literal["incoming", "outgoing"] = Query("incoming"),
) -> list[Trade]:
    return trades.list_for_user(current_user.id, direction)


@router.get("/{trade_id}", response_model=TradeResponse)
def get_trade(trade_id: str, current_user: CurrentUserDep, trades: TradeServiceDep) -> Trade:
    return trades.get(trade_id, current_user.id)


@router.post("/{trade_id}/respond", response_model=TradeResponse)
def respond_to_trade(
    trade_id: str,
    payload: TradeDecision,
    current_user: CurrentUserDep,
    trades: TradeServiceDep,
) -> Trade:
    """Accept or reject a pending trade as its responder."""
    return trades.respond(trade_id, current_user.id, payload.decision)


@router.post("/{trade_id}/complete", response_model=CompletedTradeResponse)
def complete_trade(
    trade_id: str,
    current_user: CurrentUserDep,
    trades: TradeServiceDep,
) -> CompletedTradeResponse:
    """Settle an accepted trade, moving any offered coins."""
    result = trades.complete(trade_id, current_user.id)
    return CompletedTradeResponse.model_validate(result)


@router.post("/{trade_id}/cancel", response_model=TradeResponse)
def cancel_trade(trade_id: str, current_user: CurrentUserDep, trades: TradeServiceDep) -> Trade:
    return trades.cancel(trade_id, current_user.id)
