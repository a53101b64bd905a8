"""SQLAlchemy model for registered users."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tech_news.db.session import Base

if TYPE_CHECKING:
    from tech_news.models.post import Post


class User(Base):
    """Account identified by a unique username and a bcrypt password hash."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    # The column keeps its historical name; it never holds plaintext.
    password_hash: Mapped[str] = mapped_column("password", String, nullable=False)

    posts: Mapped[list[Post]] = relationship("Post", back_populates="author")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
