"""Data access helpers for working with users."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tech_news.models.user import User

__all__ = ["UserRepository", "UsernameTakenError"]


class UsernameTakenError(Exception):
    """Raised when inserting a username that already exists."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username {username!r} is already taken")
        self.username = username


class UserRepository:
    """Thin wrapper around database access for user entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by identifier."""
        return self.session.get(User, user_id)

    def find_by_username(self, username: str) -> User | None:
        """Return the user with exactly this username, if any."""
        return self.session.execute(
            select(User).where(User.username == username)
        ).scalars().first()

    def insert(self, username: str, password_hash: str) -> int:
        """Persist a new user and return its identifier.

        Raises:
            UsernameTakenError: If the unique constraint on ``username`` fails.
        """
        user = User(username=username, password_hash=password_hash)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as err:
            self.session.rollback()
            raise UsernameTakenError(username) from err
        return user.id
