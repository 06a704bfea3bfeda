# tests/v1/test_coins.py
"""Tests for coin balance and ledger endpoints."""

from fastapi import status


def test_balance_and_history(client, alice_headers) -> None:
    balance = client.get("/api/v1/coins/balance", headers=alice_headers)
    history = client.get("/api/v1/coins/history", headers=alice_headers)

    assert balance.json() == {"balance": 100}
    assert history.status_code == status.HTTP_200_OK
    assert [(tx["amount"], tx["reason"]) for tx in history.json()] == [(100, "Signup bonus")]


def test_spend_coins(client, alice_headers) -> None:
    response = client.post(
        "/api/v1/coins/spend",
        json={"amount": 30, "reason": "Featured listing"},
        headers=alice_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["balance"] == 70
    assert data["transaction"]["amount"] == -30


def test_spend_more_than_balance(client, alice_headers) -> None:
    response = client.post(
        "/api/v1/coins/spend",
        json={"amount": 101, "reason": "Too much"},
        headers=alice_headers,
    )

    assert response.status_code == status.HTTP_402_PAYMENT_REQUIRED
    assert client.get("/api/v1/coins/balance", headers=alice_headers).json() == {"balance": 100}


def test_spend_zero_is_rejected(client, alice_headers) -> None:
    response = client.post(
        "/api/v1/coins/spend",
        json={"amount": 0, "reason": "Nothing"},
        headers=alice_headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_transfer_coins(client, bob, alice_headers, bob_headers) -> None:
    response = client.post(
        "/api/v1/coins/transfer",
        json={"to_user_id": bob.id, "amount": 40, "reason": "Lunch"},
        headers=alice_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["balance"] == 60
    assert sorted(tx["amount"] for tx in data["transactions"]) == [-40, 40]
    assert client.get("/api/v1/coins/balance", headers=bob_headers).json() == {"balance": 140}


def test_transfer_response_is_documented(client) -> None:
    schema = client.get("/openapi.json").json()

    ok = schema["paths"]["/api/v1/coins/transfer"]["post"]["responses"]["200"]
    assert ok["content"]["application/json"]["schema"] == {"$ref": "#/components/schemas/TransferResponse"}
    fields = schema["components"]["schemas"]["TransferResponse"]["properties"]
    assert set(fields) == {"balance", "transactions"}


def test_transfer_to_unknown_user(client, alice_headers) -> None:
    response = client.post(
        "/api/v1/coins/transfer",
        json={"to_user_id": "ghost", "amount": 5, "reason": "Hello?"},
        headers=alice_headers,
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_history_limit_bounds(client, alice_headers) -> None:
    response = client.get("/api/v1/coins/history", params={"limit": 0}, headers=alice_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
