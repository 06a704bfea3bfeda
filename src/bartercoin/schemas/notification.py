"""Notification-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    id: str
    user_id: str
    type: str
    title: str
    message: str
    related_id: str | None
    related_type: str | None
    is_read: bool
    read_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationPage(BaseModel):
    notifications: list[NotificationResponse]
    total: int


class NotificationPreferenceResponse(BaseModel):
    in_app_enabled: bool
    trade_updates: bool
    messages: bool
    reviews: bool

    model_config = ConfigDict(from_attributes=True)


class NotificationPreferenceUpdate(BaseModel):
    in_app_enabled: bool | None = None
    trade_updates: bool | None = None
    messages: bool | None = None
    reviews: bool | None = None
