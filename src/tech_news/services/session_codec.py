"""Signed session tokens carried in the session cookie.

Tokens are HS256 JWTs holding ``userid``, ``username`` and ``exp``. Decoding
never raises: any problem with a token means the request is anonymous.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from jose import JWTError, jwt

from tech_news.core.settings import settings
from tech_news.db.time import utcnow

__all__ = ["SessionClaim", "decode_token", "issue_token"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionClaim:
    """Identity decoded from a valid session token."""

    user_id: int
    username: str
    expires_at: int


def issue_token(user_id: int, username: str, *, now: datetime | None = None) -> str:
    """Create a signed token for ``user_id`` that expires after the session TTL.

    Args:
        user_id: Primary key of the authenticated user.
        username: Username embedded for display purposes.
        now: Issuance time; defaults to the current UTC time.

    Returns:
        The encoded JWT.
    """
    issued_at = now or utcnow()
    expire = issued_at + timedelta(seconds=settings.session_ttl_seconds)
    to_encode: dict[str, object] = {
        "userid": user_id,
        "username": username,
        "exp": int(expire.timestamp()),
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_token(token: str | None, *, now: datetime | None = None) -> SessionClaim | None:
    """Verify ``token`` and return its claim, or None if it is unusable.

    A token is rejected when it is missing, malformed, signed with another key
    or algorithm, carries claims of the wrong type, or when ``now`` is at or
    past its expiry.
    """
    if not token:
        return None

    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False},
        )
    except JWTError as err:
        logger.debug("Rejected session token: %s", err)
        return None

    user_id = payload.get("userid")
    username = payload.get("username")
    expires_at = payload.get("exp")
    if (
        not isinstance(user_id, int)
        or isinstance(user_id, bool)
        or not isinstance(username, str)
        or not isinstance(expires_at, int | float)
    ):
        logger.debug("Rejected session token with malformed claims")
        return None

    current = (now or utcnow()).timestamp()
    if current >= expires_at:
        logger.debug("Rejected expired session token for user %s", user_id)
        return None

    return SessionClaim(user_id=user_id, username=username, expires_at=int(expires_at))
