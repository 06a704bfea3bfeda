# tests/v1/test_notifications.py
"""Tests for notification endpoints."""

from fastapi import status


def _offer(client, headers, listing, responder):
    return client.post(
        "/api/v1/trades",
        json={"listing_id": listing.id, "responder_user_id": responder.id},
        headers=headers,
    )


def test_trade_offer_creates_notification(client, bob, bob_listing, alice_headers, bob_headers) -> None:
    trade_id = _offer(client, alice_headers, bob_listing, bob).json()["id"]

    response = client.get("/api/v1/notifications", headers=bob_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 1
    note = data["notifications"][0]
    assert note["type"] == "trade_offer"
    assert note["related_id"] == trade_id
    assert note["is_read"] is False


def test_mark_read_and_unread_count(client, bob, bob_listing, alice_headers, bob_headers) -> None:
    _offer(client, alice_headers, bob_listing, bob)
    _offer(client, alice_headers, bob_listing, bob)
    notes = client.get("/api/v1/notifications", headers=bob_headers).json()["notifications"]

    read = client.post(f"/api/v1/notifications/{notes[0]['id']}/read", headers=bob_headers)

    assert read.status_code == status.HTTP_200_OK
    assert read.json()["is_read"] is True
    assert client.get("/api/v1/notifications/unread-count", headers=bob_headers).json() == {"count": 1}
    unread = client.get("/api/v1/notifications", params={"is_read": False}, headers=bob_headers)
    assert unread.json()["total"] == 1

    assert client.post("/api/v1/notifications/read-all", headers=bob_headers).json() == {"updated": 1}


def test_cannot_touch_another_users_notification(
    client, bob, bob_listing, alice_headers, bob_headers
) -> None:
    _offer(client, alice_headers, bob_listing, bob)
    note_id = client.get("/api/v1/notifications", headers=bob_headers).json()["notifications"][0]["id"]

    assert client.post(f"/api/v1/notifications/{note_id}/read", headers=alice_headers).status_code == 403
    assert client.delete(f"/api/v1/notifications/{note_id}", headers=alice_headers).status_code == 403
    assert client.delete(f"/api/v1/notifications/{note_id}", headers=bob_headers).status_code == 204
    assert client.get("/api/v1/notifications", headers=bob_headers).json()["total"] == 0


def test_preferences_round_trip_and_mute(
    client, bob, bob_listing, alice_headers, bob_headers
) -> None:
    defaults = client.get("/api/v1/notifications/preferences", headers=bob_headers)
    assert defaults.json() == {
        "in_app_enabled": True,
        "trade_updates": True,
        "messages": True,
        "reviews": True,
    }

    updated = client.put(
        "/api/v1/notifications/preferences",
        json={"trade_updates": False},
        headers=bob_headers,
    )
    assert updated.json() == {
        "in_app_enabled": True,
        "trade_updates": False,
        "messages": True,
        "reviews": True,
    }

    offer = _offer(client, alice_headers, bob_listing, bob)
    assert offer.status_code == status.HTTP_201_CREATED
    assert client.get("/api/v1/notifications", headers=bob_headers).json()["total"] == 0
