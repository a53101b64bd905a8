"""Registration and login rules for user accounts."""
from __future__ import annotations

import logging
import re

from tech_news.core import security
from tech_news.models.user import User
from tech_news.repositories.user_repo import UserRepository, UsernameTakenError
from tech_news.schemas.forms import CredentialsForm

__all__ = [
    "INVALID_CREDENTIALS",
    "InvalidCredentialsError",
    "RegistrationError",
    "authenticate",
    "register_user",
    "validate_registration",
]

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9]+")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 10
PASSWORD_MIN_LENGTH = 7
PASSWORD_MAX_LENGTH = 17

USERNAME_TAKEN = "username already taken."
INVALID_CREDENTIALS = "Invalid username/password"


class RegistrationError(ValueError):
    """Raised when a registration form breaks one or more rules."""

    def __init__(self, errors: list[str], username: str = "") -> None:
        super().__init__("; ".join(errors))
        self.errors = errors
        self.username = username


class InvalidCredentialsError(ValueError):
    """Raised for any failed login, whatever the reason."""

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS)
        self.errors = [INVALID_CREDENTIALS]


def validate_registration(repo: UserRepository, username: str, password: str) -> list[str]:
    """Return every rule the submitted credentials break, in rule order.

    Args:
        repo: Repository used for the uniqueness check.
        username: Username, already trimmed.
        password: Raw password; surrounding whitespace counts.

    Returns:
        Human-readable messages; empty when registration may proceed.
    """
    errors: list[str] = []

    if not username:
        errors.append("You must provide a username.")
    else:
        if len(username) < USERNAME_MIN_LENGTH:
            errors.append(f"Username must be at least {USERNAME_MIN_LENGTH} characters.")
        if len(username) > USERNAME_MAX_LENGTH:
            errors.append(f"Username can't exceed {USERNAME_MAX_LENGTH} characters.")
        if not USERNAME_PATTERN.fullmatch(username):
            errors.append("Username can only contain letters and numbers.")
        if repo.find_by_username(username) is not None:
            errors.append(USERNAME_TAKEN)

    if not password:
        errors.append("You must provide a password.")
    else:
        if len(password) < PASSWORD_MIN_LENGTH:
            errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters.")
        if len(password) > PASSWORD_MAX_LENGTH:
            errors.append(f"Password can't exceed {PASSWORD_MAX_LENGTH} characters.")

    return errors


def register_user(repo: UserRepository, form: CredentialsForm) -> User:
    """Validate ``form`` and persist a new user with a hashed password.

    Raises:
        RegistrationError: With all failed-rule messages, including the
            uniqueness conflict when a concurrent insert wins the race.
    """
    username = form.username.strip()
    errors = validate_registration(repo, username, form.password)
    if errors:
        raise RegistrationError(errors, username)

    try:
        user_id = repo.insert(username, security.hash_password(form.password))
    except UsernameTakenError as err:
        raise RegistrationError([USERNAME_TAKEN], username) from err

    user = repo.get_by_id(user_id)
    if user is None:  # pragma: no cover - row was just committed
        raise RuntimeError(f"User {user_id} vanished after insert")
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def authenticate(repo: UserRepository, form: CredentialsForm) -> User:
    """Return the user whose credentials match ``form``.

    Raises:
        InvalidCredentialsError: For a blank field, an unknown username or a
            wrong password. The cases are indistinguishable to the caller.
    """
    username = form.username.strip()
    if not username or not form.password:
        raise InvalidCredentialsError()

    user = repo.find_by_username(username)
    if user is None or not security.verify_password(form.password, user.password_hash):
        logger.info("Failed login attempt")
        raise InvalidCredentialsError()

    logger.info("User %s logged in", user.username)
    return user
