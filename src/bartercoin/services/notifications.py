"""Notification fan-out and per-user notification preferences."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from bartercoin.core.errors import Forbidden, NotFound, ValidationError
from bartercoin.db.session import atomic
from bartercoin.db.time import utcnow
from bartercoin.models import Notification, NotificationPreference
from bartercoin.models.notification import (
    NOTIFICATION_MESSAGE,
    NOTIFICATION_REVIEW,
    TRADE_NOTIFICATION_TYPES,
)

logger = logging.getLogger(__name__)

__all__ = ["NotificationService"]

PREFERENCE_FIELDS = frozenset({"in_app_enabled", "trade_updates", "messages", "reviews"})


class NotificationService:
    """Create and manage notifications for a single database session.

    ``emit`` is best-effort: it runs in its own transaction after the
    triggering mutation has committed and never raises.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def emit(
        self,
        user_id: str,
        type: str,
        title: str,
        message: str,
        related_id: str | None = None,
        related_type: str | None = None,
    ) -> Notification | None:
        """Append a notification for ``user_id`` unless their preferences mute it.

        Returns the stored notification, or ``None`` when it was muted or
        could not be written.
        """
        try:
            with atomic(self.db):
                if not self._is_enabled(user_id, type):
                    logger.debug("Notification %s muted for %s", type, user_id)
                    return None
                notification = Notification(
                    user_id=user_id,
                    type=type,
                    title=title,
                    message=message,
                    related_id=related_id,
                    related_type=related_type,
                )
                self.db.add(notification)
            return notification
        except Exception:
            logger.warning(
                "Failed to create %s notification for %s", type, user_id, exc_info=True
            )
            return None

    def list(
        self,
        user_id: str,
        *,
        is_read: bool | None = None,
        type: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Notification], int]:
        conditions = [Notification.user_id == user_id]
        if is_read is not None:
            conditions.append(Notification.is_read.is_(is_read))
        if type:
            conditions.append(Notification.type == type)

        total = self.db.execute(
            select(func.count()).select_from(Notification).where(*conditions)
        ).scalar_one()
        stmt = (
            select(Notification)
            .where(*conditions)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars()), total

    def unread_count(self, user_id: str) -> int:
        return self.db.execute(
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        ).scalar_one()

    def mark_read(self, notification_id: str, user_id: str) -> Notification:
        notification = self._get_owned(notification_id, user_id)
        if not notification.is_read:
            with atomic(self.db):
                notification.is_read = True
                notification.read_at = utcnow()
            self.db.refresh(notification)
        return notification

    def mark_all_read(self, user_id: str) -> int:
        with atomic(self.db):
            result = self.db.execute(
                update(Notification)
                .where(Notification.user_id == user_id, Notification.is_read.is_(False))
                .values(is_read=True, read_at=utcnow())
                .execution_options(synchronize_session="fetch")
            )
        return result.rowcount

    def delete(self, notification_id: str, user_id: str) -> None:
        notification = self._get_owned(notification_id, user_id)
        with atomic(self.db):
            self.db.delete(notification)

    def get_preferences(self, user_id: str) -> NotificationPreference:
        """Return the user's preferences, creating the all-enabled default."""
        preference = self.db.get(NotificationPreference, user_id)
        if preference is None:
            with atomic(self.db):
                preference = NotificationPreference(user_id=user_id)
                self.db.add(preference)
            self.db.refresh(preference)
        return preference

    def update_preferences(self, user_id: str, updates: Mapping[str, Any]) -> NotificationPreference:
        unknown = set(updates) - PREFERENCE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown preference fields: {', '.join(sorted(unknown))}")
        preference = self.get_preferences(user_id)
        with atomic(self.db):
            for key, value in updates.items():
                setattr(preference, key, bool(value))
        self.db.refresh(preference)
        return preference

    def _is_enabled(self, user_id: str, type: str) -> bool:
        preference = self.db.get(NotificationPreference, user_id)
        if preference is None:
            return True
        if not preference.in_app_enabled:
            return False
        if type in TRADE_NOTIFICATION_TYPES:
            return preference.trade_updates
        if type == NOTIFICATION_MESSAGE:
            return preference.messages
        if type == NOTIFICATION_REVIEW:
            return preference.reviews
        return True

    def _get_owned(self, notification_id: str, user_id: str) -> Notification:
        notification = self.db.get(Notification, notification_id)
        if notification is None:
            raise NotFound("Notification not found")
        if notification.user_id != user_id:
            raise Forbidden("Cannot modify another user's notification")
        return notification
