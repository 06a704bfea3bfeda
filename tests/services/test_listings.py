# tests/services/test_listings.py
"""Tests for the listing store."""

import pytest

from bartercoin.core.errors import Forbidden, InvalidTransition, NotFound, ValidationError
from bartercoin.models import Listing
from bartercoin.models.listing import (
    LISTING_STATUS_ACTIVE,
    LISTING_STATUS_ARCHIVED,
    LISTING_STATUS_DELETED,
)
from bartercoin.services import ListingService


def test_create_sets_owner_and_active_status(db_session, alice) -> None:
    service = ListingService(db_session)

    listing = service.create(
        alice.id,
        {
            "title": "Sourdough starter",
            "description": "Lively starter, fed twice a day",
            "category": "food",
            "price": 5,
        },
    )

    assert listing.owner_id == alice.id
    assert listing.status == LISTING_STATUS_ACTIVE
    assert listing.is_service is False
    assert service.get(listing.id).title == "Sourdough starter"


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": "ab"},
        {"description": "too short"},
        {"category": "   "},
        {"price": -1},
    ],
)
def test_create_rejects_out_of_bounds_fields(db_session, alice, overrides) -> None:
    data = {
        "title": "Garden tools",
        "description": "Rake, spade and a trowel",
        "category": "garden",
        "price": 10,
    }
    data.update(overrides)

    with pytest.raises(ValidationError):
        ListingService(db_session).create(alice.id, data)


def test_create_requires_title_description_and_category(db_session, alice) -> None:
    with pytest.raises(ValidationError, match="description"):
        ListingService(db_session).create(alice.id, {"title": "Lamp", "category": "home"})


def test_update_by_owner_changes_fields(db_session, bob, bob_listing) -> None:
    service = ListingService(db_session)

    updated = service.update(bob_listing.id, bob.id, {"price": 45, "is_service": True})

    assert updated.price == 45
    assert updated.is_service is True
    assert updated.title == "Bob's guitar"


def test_update_by_non_owner_is_forbidden(db_session, alice, bob_listing) -> None:
    with pytest.raises(Forbidden):
        ListingService(db_session).update(bob_listing.id, alice.id, {"price": 1})


def test_update_rejects_status_and_owner_fields(db_session, bob, bob_listing) -> None:
    service = ListingService(db_session)

    with pytest.raises(ValidationError):
        service.update(bob_listing.id, bob.id, {"status": LISTING_STATUS_ARCHIVED})
    with pytest.raises(ValidationError):
        service.update(bob_listing.id, bob.id, {"owner_id": "alice"})


def test_archive_only_from_active(db_session, bob, bob_listing) -> None:
    service = ListingService(db_session)

    archived = service.archive(bob_listing.id, bob.id)
    assert archived.status == LISTING_STATUS_ARCHIVED

    with pytest.raises(InvalidTransition):
        service.archive(bob_listing.id, bob.id)


def test_delete_hides_listing_everywhere(db_session, bob, bob_listing) -> None:
    service = ListingService(db_session)

    service.delete(bob_listing.id, bob.id)

    with pytest.raises(NotFound):
        service.get(bob_listing.id)
    with pytest.raises(NotFound):
        service.delete(bob_listing.id, bob.id)
    assert service.list_for_owner(bob.id) == []
    items, total = service.list()
    assert total == 0 and items == []
    assert db_session.get(Listing, bob_listing.id).status == LISTING_STATUS_DELETED


def test_delete_by_non_owner_is_forbidden(db_session, alice, bob_listing) -> None:
    with pytest.raises(Forbidden):
        ListingService(db_session).delete(bob_listing.id, alice.id)


def test_get_unknown_listing(db_session) -> None:
    with pytest.raises(NotFound):
        ListingService(db_session).get("missing")


def test_list_paginates_active_listings(db_session, alice, make_listing) -> None:
    service = ListingService(db_session)
    created = {make_listing(alice, f"Item number {i}").id for i in range(25)}

    page_one, total = service.list(page=1, limit=10)
    page_two, _ = service.list(page=2, limit=10)
    page_three, _ = service.list(page=3, limit=10)

    assert total == 25
    assert [len(page_one), len(page_two), len(page_three)] == [10, 10, 5]
    seen = [item.id for item in page_one + page_two + page_three]
    assert len(set(seen)) == 25
    assert set(seen) == created


def test_list_orders_newest_first(db_session, alice, make_listing) -> None:
    first = make_listing(alice, "Older listing")
    second = make_listing(alice, "Newer listing")

    items, _ = ListingService(db_session).list()

    assert [item.id for item in items] == [second.id, first.id]


def test_list_filters_by_category_and_search(db_session, alice, make_listing) -> None:
    make_listing(alice, "Acoustic guitar", category="music")
    make_listing(alice, "Mountain bike", category="sports")
    make_listing(alice, "Tennis racket", category="sports", description="Barely used, great GUITAR-free fun")
    service = ListingService(db_session)

    sports, sports_total = service.list(category="sports")
    guitars, guitars_total = service.list(search="guitar")
    sports_guitars, _ = service.list(category="sports", search="Guitar")

    assert sports_total == 2
    assert {item.category for item in sports} == {"sports"}
    assert guitars_total == 2
    assert [item.title for item in sports_guitars] == ["Tennis racket"]


def test_search_treats_like_wildcards_literally(db_session, alice, make_listing) -> None:
    make_listing(alice, "Plain bicycle")
    make_listing(alice, "Bike 50% off")
    service = ListingService(db_session)

    percent, percent_total = service.list(search="%")
    underscore, underscore_total = service.list(search="_")
    backslash, _ = service.list(search="\\")

    assert percent_total == 1
    assert [item.title for item in percent] == ["Bike 50% off"]
    assert underscore_total == 0
    assert underscore == []
    assert backslash == []


def test_update_rejects_null_is_service(db_session, bob, bob_listing) -> None:
    with pytest.raises(ValidationError):
        ListingService(db_session).update(bob_listing.id, bob.id, {"is_service": None})


def test_list_excludes_archived_listings(db_session, bob, bob_listing, make_listing) -> None:
    other = make_listing(bob, "Drum kit")
    service = ListingService(db_session)
    service.archive(bob_listing.id, bob.id)

    items, total = service.list()

    assert total == 1
    assert [item.id for item in items] == [other.id]
    assert {item.id for item in service.list_for_owner(bob.id)} == {bob_listing.id, other.id}


def test_list_rejects_non_positive_page(db_session) -> None:
    with pytest.raises(ValidationError):
        ListingService(db_session).list(page=0)
