# tests/v1/test_listings.py
"""Tests for listing endpoints."""

from fastapi import status

LISTING_PAYLOAD = {
    "title": "Hand-thrown mug",
    "description": "Stoneware mug with a speckled glaze",
    "category": "home",
    "price": 12,
}


def test_create_listing(client, alice, alice_headers) -> None:
    response = client.post("/api/v1/listings", json=LISTING_PAYLOAD, headers=alice_headers)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["owner_id"] == alice.id
    assert data["owner"]["username"] == "alice"
    assert data["status"] == "ACTIVE"
    assert data["is_service"] is False


def test_create_listing_requires_auth(client) -> None:
    response = client.post("/api/v1/listings", json=LISTING_PAYLOAD)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_create_listing_validation(client, alice_headers) -> None:
    payload = dict(LISTING_PAYLOAD, title="ab")

    response = client.post("/api/v1/listings", json=payload, headers=alice_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "validation_error"


def test_browse_listings_paginates(client, alice, make_listing) -> None:
    for i in range(25):
        make_listing(alice, f"Listing number {i}")

    response = client.get("/api/v1/listings", params={"page": 2, "limit": 10})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert len(data["listings"]) == 10
    assert data["pagination"] == {"page": 2, "limit": 10, "total": 25, "pages": 3}


def test_browse_listings_filters(client, alice, make_listing) -> None:
    make_listing(alice, "Yoga mat", category="sports")
    make_listing(alice, "Board game night", category="games", is_service=True)

    response = client.get("/api/v1/listings", params={"category": "games"})
    searched = client.get("/api/v1/listings", params={"search": "YOGA"})

    assert [item["title"] for item in response.json()["listings"]] == ["Board game night"]
    assert response.json()["listings"][0]["is_service"] is True
    assert [item["title"] for item in searched.json()["listings"]] == ["Yoga mat"]


def test_browse_listings_limit_is_capped(client) -> None:
    response = client.get("/api/v1/listings", params={"limit": 1000})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_get_listing(client, bob_listing) -> None:
    response = client.get(f"/api/v1/listings/{bob_listing.id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] == "Bob's guitar"


def test_update_listing_by_owner_and_non_owner(client, bob_listing, alice_headers, bob_headers) -> None:
    url = f"/api/v1/listings/{bob_listing.id}"

    forbidden = client.patch(url, json={"price": 1}, headers=alice_headers)
    updated = client.patch(url, json={"price": 55}, headers=bob_headers)

    assert forbidden.status_code == status.HTTP_403_FORBIDDEN
    assert forbidden.json()["error"] == "forbidden"
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["price"] == 55


def test_update_listing_rejects_null_is_service(client, bob_listing, bob_headers) -> None:
    response = client.patch(
        f"/api/v1/listings/{bob_listing.id}",
        json={"is_service": None},
        headers=bob_headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "validation_error"
    assert client.get(f"/api/v1/listings/{bob_listing.id}").json()["is_service"] is False


def test_archive_listing(client, bob_listing, bob_headers) -> None:
    url = f"/api/v1/listings/{bob_listing.id}/archive"

    first = client.post(url, headers=bob_headers)
    second = client.post(url, headers=bob_headers)

    assert first.status_code == status.HTTP_200_OK
    assert first.json()["status"] == "ARCHIVED"
    assert second.status_code == status.HTTP_409_CONFLICT
    assert second.json()["error"] == "invalid_transition"


def test_delete_listing(client, bob_listing, bob_headers, alice_headers) -> None:
    url = f"/api/v1/listings/{bob_listing.id}"

    assert client.delete(url, headers=alice_headers).status_code == status.HTTP_403_FORBIDDEN
    assert client.delete(url, headers=bob_headers).status_code == status.HTTP_204_NO_CONTENT
    assert client.get(url).status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/v1/listings/mine", headers=bob_headers).json() == []


def test_my_listings_include_archived(client, bob, bob_listing, bob_headers, make_listing) -> None:
    other = make_listing(bob, "Amplifier")
    client.post(f"/api/v1/listings/{bob_listing.id}/archive", headers=bob_headers)

    response = client.get("/api/v1/listings/mine", headers=bob_headers)

    assert response.status_code == status.HTTP_200_OK
    statuses = {item["id"]: item["status"] for item in response.json()}
    assert statuses == {bob_listing.id: "ARCHIVED", other.id: "ACTIVE"}
