# tests/services/test_messages.py
"""Tests for direct messages and conversation rows."""

import pytest
from sqlalchemy import select

from bartercoin.core.errors import InvalidMessage, NotFound
from bartercoin.models import Conversation, Message, Notification
from bartercoin.services import MessageService, NotificationService


@pytest.fixture()
def service(db_session) -> MessageService:
    return MessageService(db_session)


def _conversation(db_session, user_id: str, other_user_id: str) -> Conversation:
    return db_session.execute(
        select(Conversation).where(
            Conversation.user_id == user_id,
            Conversation.other_user_id == other_user_id,
        )
    ).scalar_one()


def test_send_stores_trimmed_message_and_both_conversations(db_session, service, alice, bob) -> None:
    message = service.send(alice.id, bob.id, "  Is the guitar still available?  ")

    assert message.content == "Is the guitar still available?"
    assert message.is_read is False
    for owner, other in ((alice.id, bob.id), (bob.id, alice.id)):
        conversation = _conversation(db_session, owner, other)
        assert conversation.last_message == message.content
        assert conversation.last_message_at is not None


def test_send_updates_existing_conversations_instead_of_duplicating(
    db_session, service, alice, bob
) -> None:
    service.send(alice.id, bob.id, "Hello")
    reply = service.send(bob.id, alice.id, "Hi there")

    rows = list(db_session.execute(select(Conversation)).scalars())
    assert len(rows) == 2
    assert {row.last_message for row in rows} == {reply.content}


def test_send_notifies_receiver_with_preview(db_session, service, alice, bob) -> None:
    service.send(alice.id, bob.id, "x" * 80)

    note = db_session.execute(
        select(Notification).where(Notification.user_id == bob.id)
    ).scalar_one()
    assert note.type == "message"
    assert note.message.endswith('..."')
    assert "x" * 50 in note.message
    assert "x" * 51 not in note.message


def test_muted_message_notifications_are_skipped(db_session, service, alice, bob) -> None:
    NotificationService(db_session).update_preferences(bob.id, {"messages": False})

    service.send(alice.id, bob.id, "Ping")

    assert db_session.execute(select(Notification)).scalars().all() == []


@pytest.mark.parametrize("content", ["", "   ", "\n\t"])
def test_blank_message_is_rejected(db_session, service, alice, bob, content) -> None:
    with pytest.raises(InvalidMessage):
        service.send(alice.id, bob.id, content)
    assert db_session.execute(select(Message)).scalars().all() == []


def test_message_to_self_is_rejected(service, alice) -> None:
    with pytest.raises(InvalidMessage):
        service.send(alice.id, alice.id, "Note to self")


def test_message_to_unknown_user(service, alice) -> None:
    with pytest.raises(NotFound):
        service.send(alice.id, "ghost", "Anyone there?")


def test_list_messages_is_oldest_first_and_limited(service, alice, bob, carol) -> None:
    first = service.send(alice.id, bob.id, "One")
    second = service.send(bob.id, alice.id, "Two")
    third = service.send(alice.id, bob.id, "Three")
    service.send(carol.id, alice.id, "Unrelated")

    history = service.list_messages(alice.id, bob.id)
    recent = service.list_messages(bob.id, alice.id, limit=2)

    assert [m.id for m in history] == [first.id, second.id, third.id]
    assert [m.id for m in recent] == [second.id, third.id]


def test_list_conversations_newest_activity_first(service, alice, bob, carol) -> None:
    service.send(bob.id, alice.id, "From Bob")
    service.send(carol.id, alice.id, "From Carol")

    views = service.list_conversations(alice.id)

    assert [view.user_id for view in views] == [carol.id, bob.id]
    assert views[0].username == "carol"
    assert views[0].last_message == "From Carol"


def test_mark_read_and_unread_count(service, alice, bob, carol) -> None:
    service.send(bob.id, alice.id, "One")
    service.send(bob.id, alice.id, "Two")
    service.send(carol.id, alice.id, "Three")
    service.send(alice.id, bob.id, "Reply")

    assert service.unread_count(alice.id) == 3
    assert service.mark_read(alice.id, bob.id) == 2
    assert service.unread_count(alice.id) == 1
    assert service.mark_read(alice.id, bob.id) == 0
    received = [m for m in service.list_messages(alice.id, bob.id) if m.receiver_id == alice.id]
    assert all(m.is_read and m.read_at is not None for m in received)
