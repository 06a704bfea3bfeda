"""Shared API dependencies for authentication and service wiring."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bartercoin.core.errors import Unauthenticated
from bartercoin.core.security import decode_subject
from bartercoin.db.session import get_db
from bartercoin.models import Profile
from bartercoin.services import (
    LedgerService,
    ListingService,
    MessageService,
    NotificationService,
    ProfileService,
    ReviewService,
    TradeService,
)

# HTTP Bearer scheme; tokens come from the external identity provider
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Return the verified subject of the bearer token.

    Raises:
        Unauthenticated: If the header is missing or the token is invalid.
    """
    if credentials is None:
        raise Unauthenticated("Missing or invalid authorization header")
    return decode_subject(credentials.credentials)


CurrentUserIdDep = Annotated[str, Depends(get_current_user_id)]


def get_current_user(user_id: CurrentUserIdDep, db: SessionDep) -> Profile:
    """Return the profile of the authenticated caller.

    Raises:
        Unauthenticated: If the identity has not registered a profile yet.
    """
    profile = db.get(Profile, user_id)
    if profile is None:
        raise Unauthenticated("User not found")
    return profile


# Type alias for current user dependency
CurrentUserDep = Annotated[Profile, Depends(get_current_user)]


def get_ledger_service(db: SessionDep) -> LedgerService:
    return LedgerService(db)


def get_notification_service(db: SessionDep) -> NotificationService:
    return NotificationService(db)


def get_listing_service(db: SessionDep) -> ListingService:
    return ListingService(db)


def get_profile_service(db: SessionDep) -> ProfileService:
    return ProfileService(db, ledger=LedgerService(db))


def get_trade_service(db: SessionDep) -> TradeService:
    return TradeService(
        db,
        ledger=LedgerService(db),
        notifications=NotificationService(db),
    )


def get_message_service(db: SessionDep) -> MessageService:
    return MessageService(db, notifications=NotificationService(db))


def get_review_service(db: SessionDep) -> ReviewService:
    return ReviewService(db, notifications=NotificationService(db))


LedgerServiceDep = Annotated[LedgerService, Depends(get_ledger_service)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
ListingServiceDep = Annotated[ListingService, Depends(get_listing_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
TradeServiceDep = Annotated[TradeService, Depends(get_trade_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
