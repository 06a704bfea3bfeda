"""Notification endpoints for the BarterCoin API."""

from fastapi import APIRouter, Query, Response, status

from bartercoin.models import Notification, NotificationPreference
from bartercoin.schemas.notification import (
    NotificationPage,
    NotificationPreferenceResponse,
    NotificationPreferenceUpdate,
    NotificationResponse,
)

from ..dependencies import CurrentUserDep, NotificationServiceDep

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationPage)
def list_notifications(
    current_user: CurrentUserDep,
    notifications: NotificationServiceDep,
    is_read: bool | None = Query(None),
    type: str | None = Query(None, description="Filter by notification type"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> NotificationPage:
    items, total = notifications.list(
        current_user.id, is_read=is_read, type=type, limit=limit, offset=offset
    )
    return NotificationPage(
        notifications=[NotificationResponse.model_validate(item) for item in items],
        total=total,
    )


@router.get("/unread-count")
def get_unread_count(
    current_user: CurrentUserDep,
    notifications: NotificationServiceDep,
) -> dict[str, int]:
    return {"count": notifications.unread_count(current_user.id)}


@router.post("/read-all")
def mark_all_read(
    current_user: CurrentUserDep,
    notifications: NotificationServiceDep,
) -> dict[str, int]:
    return {"updated": notifications.mark_all_read(current_user.id)}


@router.get("/preferences", response_model=NotificationPreferenceResponse)
def get_preferences(
    current_user: CurrentUserDep,
    notifications: NotificationServiceDep,
) -> NotificationPreference:
    return notifications.get_preferences(current_user.id)


@router.put("/preferences", response_model=NotificationPreferenceResponse)
def update_preferences(
    payload: NotificationPreferenceUpdate,
    current_user: CurrentUserDep,
    notifications: NotificationServiceDep,
) -> NotificationPreference:
    updates = payload.model_dump(exclude_none=True)
    return notifications.update_preferences(current_user.id, updates)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: str,
    current_user: CurrentUserDep,
    notifications: NotificationServiceDep,
) -> Notification:
    return notifications.mark_read(notification_id, current_user.id)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: str,
    current_user: CurrentUserDep,
    notifications: NotificationServiceDep,
) -> Response:
    notifications.delete(notification_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
