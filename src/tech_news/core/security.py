"""Password hashing built on bcrypt."""
from __future__ import annotations

import bcrypt

from tech_news.core.settings import settings


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``.

    Args:
        password: Plaintext password as submitted by the user.

    Returns:
        The bcrypt hash, decoded to text for storage.
    """
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored bcrypt hash.

    Returns:
        True if the password matches; False otherwise, including when the
        stored hash is malformed.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
