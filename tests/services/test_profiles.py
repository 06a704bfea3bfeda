# tests/services/test_profiles.py
"""Tests for profile registration."""

import pytest

from bartercoin.core.errors import Conflict, NotFound, ValidationError
from bartercoin.services import LedgerService, ProfileService


def test_register_grants_signup_bonus_through_ledger(db_session) -> None:
    profile = ProfileService(db_session).register("dana-sub", "dana", "Dana")

    assert profile.username == "dana"
    assert profile.coin_balance == 100
    history = LedgerService(db_session).get_history("dana-sub")
    assert [tx.amount for tx in history] == [100]


@pytest.mark.parametrize("username", ["ab", "has space", "x" * 33, ""])
def test_register_rejects_bad_usernames(db_session, username) -> None:
    with pytest.raises(ValidationError):
        ProfileService(db_session).register("sub-1", username)


def test_register_twice_conflicts(db_session, alice) -> None:
    service = ProfileService(db_session)

    with pytest.raises(Conflict):
        service.register(alice.id, "another_name")
    with pytest.raises(Conflict):
        service.register("someone-else", alice.username)


def test_update_only_touches_display_fields(db_session, alice) -> None:
    service = ProfileService(db_session)

    updated = service.update(alice.id, {"bio": "Collector of odd things"})

    assert updated.bio == "Collector of odd things"
    with pytest.raises(ValidationError):
        service.update(alice.id, {"coin_balance": 10_000})
    assert LedgerService(db_session).get_balance(alice.id) == 100


def test_get_unknown_profile(db_session) -> None:
    with pytest.raises(NotFound):
        ProfileService(db_session).get("nobody")
