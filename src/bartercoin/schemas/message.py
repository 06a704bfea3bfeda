"""Direct message-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):
    """Schema for sending a direct message."""

    receiver_id: str = Field(..., min_length=1)
    content: str = Field(..., max_length=5000)


class MessageResponse(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    content: str
    is_read: bool
    read_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ConversationResponse(BaseModel):
    """Inbox entry resolved to the other participant's public fields."""

    id: str
    user_id: str
    username: str | None
    display_name: str | None
    avatar_url: str | None
    bio: str | None
    last_message: str | None
    last_message_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
