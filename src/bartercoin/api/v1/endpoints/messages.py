"""Direct message endpoints for the BarterCoin API."""

from fastapi import APIRouter, Query, status

from bartercoin.models import Message
from bartercoin.schemas.message import ConversationResponse, MessageCreate, MessageResponse

from ..dependencies import CurrentUserDep, MessageServiceDep

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    current_user: CurrentUserDep,
    messages: MessageServiceDep,
) -> Message:
    """Send a direct message and refresh both participants' inbox rows."""
    return messages.send(current_user.id, payload.receiver_id, payload.content)


@router.get("/conversations", response_model=list[ConversationResponse])
def list_conversations(
    current_user: CurrentUserDep,
    messages: MessageServiceDep,
) -> list[ConversationResponse]:
    return [
        ConversationResponse.model_validate(view)
        for view in messages.list_conversations(current_user.id)
    ]


@router.get("/unread-count")
def get_unread_count(current_user: CurrentUserDep, messages: MessageServiceDep) -> dict[str, int]:
    return {"count": messages.unread_count(current_user.id)}


@router.get("/{other_user_id}", response_model=list[MessageResponse])
def list_messages(
    other_user_id: str,
    current_user: CurrentUserDep,
    messages: MessageServiceDep,
    limit: int | None = Query(None, ge=1, le=500),
) -> list[Message]:
    """Return the conversation with another user, oldest first."""
    return messages.list_messages(current_user.id, other_user_id, limit)


@router.post("/{other_user_id}/read")
def mark_conversation_read(
    other_user_id: str,
    current_user: CurrentUserDep,
    messages: MessageServiceDep,
) -> dict[str, int]:
    return {"updated": messages.mark_read(current_user.id, other_user_id)}
