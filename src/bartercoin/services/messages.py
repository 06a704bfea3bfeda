"""Direct messages and the per-pair conversation index."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.orm import Session

from bartercoin.core.errors import InvalidMessage, NotFound
from bartercoin.db.session import atomic
from bartercoin.db.time import utcnow
from bartercoin.models import Conversation, Message, Profile
from bartercoin.models.notification import NOTIFICATION_MESSAGE
from bartercoin.services.notifications import NotificationService

logger = logging.getLogger(__name__)

__all__ = ["MessageService", "ConversationView"]

PREVIEW_LENGTH = 50


@dataclass(frozen=True)
class ConversationView:
    """A conversation row resolved to the other party's public fields."""

    id: str
    user_id: str
    username: str | None
    display_name: str | None
    avatar_url: str | None
    bio: str | None
    last_message: str | None
    last_message_at: datetime | None
    created_at: datetime


class MessageService:
    """Append-only message log with symmetric inbox rows.

    Each send writes the message and both conversation rows in one
    transaction, so the two inboxes never disagree about the latest message.
    Real-time delivery happens elsewhere; this is the system of record.
    """

    def __init__(self, db: Session, notifications: NotificationService | None = None) -> None:
        self.db = db
        self.notifications = notifications or NotificationService(db)

    def send(self, sender_id: str, receiver_id: str, content: str) -> Message:
        text = (content or "").strip()
        if not text:
            raise InvalidMessage("Message content cannot be empty")
        if sender_id == receiver_id:
            raise InvalidMessage("Cannot send message to yourself")

        sender = self.db.get(Profile, sender_id)
        receiver = self.db.get(Profile, receiver_id)
        if sender is None or receiver is None:
            raise NotFound("Recipient not found")

        with atomic(self.db):
            message = Message(sender_id=sender_id, receiver_id=receiver_id, content=text)
            self.db.add(message)
            self.db.flush()
            self._touch_conversations(sender_id, receiver_id, text, message.created_at)
        self.db.refresh(message)

        preview = text if len(text) <= PREVIEW_LENGTH else f"{text[:PREVIEW_LENGTH]}..."
        self.notifications.emit(
            receiver_id,
            NOTIFICATION_MESSAGE,
            "New message",
            f'{sender.username} sent you a message: "{preview}"',
            related_id=message.id,
            related_type="message",
        )
        return message

    def list_conversations(self, user_id: str) -> list[ConversationView]:
        """Return the user's inbox, most recent activity first."""
        stmt = (
            select(Conversation, Profile)
            .join(Profile, Profile.id == Conversation.other_user_id)
            .where(Conversation.user_id == user_id)
            .order_by(
                Conversation.last_message_at.desc().nulls_last(),
                Conversation.created_at.desc(),
            )
        )
        return [
            ConversationView(
                id=conversation.id,
                user_id=other.id,
                username=other.username,
                display_name=other.display_name,
                avatar_url=other.avatar_url,
                bio=other.bio,
                last_message=conversation.last_message,
                last_message_at=conversation.last_message_at,
                created_at=conversation.created_at,
            )
            for conversation, other in self.db.execute(stmt).all()
        ]

    def list_messages(
        self,
        user_id: str,
        other_user_id: str,
        limit: int | None = None,
    ) -> list[Message]:
        """Return the history between two users, oldest first.

        With ``limit`` only the most recent ``limit`` messages are returned.
        """
        stmt = (
            select(Message)
            .where(_between(user_id, other_user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        messages = list(self.db.execute(stmt).scalars())
        messages.reverse()
        return messages

    def mark_read(self, user_id: str, other_user_id: str) -> int:
        """Mark every unread message from ``other_user_id`` to ``user_id`` as read."""
        with atomic(self.db):
            result = self.db.execute(
                update(Message)
                .where(
                    Message.sender_id == other_user_id,
                    Message.receiver_id == user_id,
                    Message.is_read.is_(False),
                )
                .values(is_read=True, read_at=utcnow())
                .execution_options(synchronize_session="fetch")
            )
        return result.rowcount

    def unread_count(self, user_id: str) -> int:
        return self.db.execute(
            select(func.count())
            .select_from(Message)
            .where(Message.receiver_id == user_id, Message.is_read.is_(False))
        ).scalar_one()

    def _touch_conversations(
        self,
        sender_id: str,
        receiver_id: str,
        text: str,
        sent_at: datetime,
    ) -> None:
        for owner_id, other_id in ((sender_id, receiver_id), (receiver_id, sender_id)):
            conversation = self.db.execute(
                select(Conversation).where(
                    Conversation.user_id == owner_id,
                    Conversation.other_user_id == other_id,
                )
            ).scalar_one_or_none()
            if conversation is None:
                conversation = Conversation(user_id=owner_id, other_user_id=other_id)
                self.db.add(conversation)
            conversation.last_message = text
            conversation.last_message_at = sent_at
        self.db.flush()


def _between(user_id: str, other_user_id: str):
    return or_(
        and_(Message.sender_id == user_id, Message.receiver_id == other_user_id),
        and_(Message.sender_id == other_user_id, Message.receiver_id == user_id),
    )
