"""SQLAlchemy model for posts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tech_news.db.session import Base

if TYPE_CHECKING:
    from tech_news.models.user import User


class Post(Base):
    """Plain-text article owned by exactly one user.

    Title and content are stored with all HTML removed; Markdown is expanded
    only when a post is displayed.
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # ISO 8601 UTC string, set once at creation.
    created_date: Mapped[str] = mapped_column("createdDate", Text, nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        "authorid",
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )

    author: Mapped[User] = relationship("User", back_populates="posts")

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, author_id={self.author_id}, title='{self.title}')>"
