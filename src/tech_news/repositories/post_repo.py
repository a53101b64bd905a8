"""Data access helpers for working with posts."""
from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from tech_news.models.post import Post
from tech_news.models.user import User

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.execute(
            select(Post).where(Post.id == post_id)
        ).scalars().first()

    def get_with_author_username(self, post_id: int) -> tuple[Post, str] | None:
        """Return a post joined with its author's username for display."""
        row = self.session.execute(
            select(Post, User.username)
            .join(User, Post.author_id == User.id)
            .where(Post.id == post_id)
        ).first()
        if row is None:
            return None
        return row[0], row[1]

    def list_by_author(self, author_id: int) -> list[Post]:
        """Return an author's posts, newest first."""
        result = self.session.execute(
            select(Post)
            .where(Post.author_id == author_id)
            .order_by(Post.created_date.desc(), Post.id.desc())
        )
        return list(result.scalars())

    def create(
        self,
        *,
        title: str,
        content: str,
        author_id: int,
        created_date: str,
    ) -> int:
        """Insert a new post and return its identifier.

        Args:
            title: Tag-stripped title.
            content: Tag-stripped body text.
            author_id: Identifier of the owning user.
            created_date: ISO 8601 creation timestamp supplied by the service layer.
        """
        post = Post(
            title=title,
            content=content,
            author_id=author_id,
            created_date=created_date,
        )
        self.session.add(post)
        self.session.commit()
        return post.id

    def update(self, post_id: int, *, title: str, content: str) -> None:
        """Replace the title and content of a post.

        The creation date and author are never touched.
        """
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(title=title, content=content)
        )
        self.session.commit()

    def delete(self, post_id: int) -> None:
        """Remove a post permanently."""
        self.session.execute(delete(Post).where(Post.id == post_id))
        self.session.commit()
