"""Bearer token helpers.

Tokens are minted by the external identity provider with a shared HS256
secret; the API only verifies them and reads the subject claim.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from bartercoin.core.errors import Unauthenticated
from bartercoin.core.settings import settings


def create_access_token(subject: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed JWT whose ``sub`` claim is the profile id."""
    to_encode: dict[str, object] = {"sub": subject}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_subject(token: str) -> str:
    """Verify ``token`` and return its subject.

    Raises:
        Unauthenticated: If the signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise Unauthenticated("Could not validate credentials") from err

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise Unauthenticated("Could not validate credentials")
    return subject
