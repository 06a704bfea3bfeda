"""Profile registration and public profile fields."""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from bartercoin.core.errors import Conflict, NotFound, ValidationError
from bartercoin.core.settings import settings
from bartercoin.db.session import atomic
from bartercoin.models import Profile
from bartercoin.services.ledger import LedgerService

logger = logging.getLogger(__name__)

__all__ = ["ProfileService"]

USERNAME_RE = re.compile(r"^[A-Za-z0-9_]{3,32}$")
EDITABLE_FIELDS = frozenset({"display_name", "bio", "avatar_url"})
SIGNUP_BONUS_REASON = "Signup bonus"


class ProfileService:
    """Create profiles for authenticated identities and edit display fields."""

    def __init__(self, db: Session, ledger: LedgerService | None = None) -> None:
        self.db = db
        self.ledger = ledger or LedgerService(db)

    def register(self, user_id: str, username: str, display_name: str | None = None) -> Profile:
        """Create the profile for ``user_id`` and grant the signup bonus.

        The balance starts at zero and the bonus goes through the ledger so
        the history accounts for every coin.
        """
        if not USERNAME_RE.fullmatch(username or ""):
            raise ValidationError(
                "Username must be 3-32 characters of letters, digits or underscores"
            )
        if self.db.get(Profile, user_id) is not None:
            raise Conflict("Profile already exists")
        taken = self.db.execute(
            select(Profile.id).where(Profile.username == username)
        ).first()
        if taken is not None:
            raise Conflict("Username is already taken")

        with atomic(self.db):
            profile = Profile(
                id=user_id,
                username=username,
                display_name=display_name,
                coin_balance=0,
            )
            self.db.add(profile)
            self.db.flush()
            if settings.signup_bonus_coins > 0:
                self.ledger.credit(
                    user_id,
                    settings.signup_bonus_coins,
                    SIGNUP_BONUS_REASON,
                    commit=False,
                )
        self.db.refresh(profile)
        logger.info("Registered profile %s (%s)", user_id, username)
        return profile

    def get(self, user_id: str) -> Profile:
        profile = self.db.get(Profile, user_id)
        if profile is None:
            raise NotFound("User not found")
        return profile

    def update(self, user_id: str, patch: Mapping[str, Any]) -> Profile:
        unknown = set(patch) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        profile = self.get(user_id)
        with atomic(self.db):
            for key, value in patch.items():
                setattr(profile, key, value)
        self.db.refresh(profile)
        return profile
