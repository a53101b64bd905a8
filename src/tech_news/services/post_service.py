"""Service-level helpers for creating, editing and deleting posts."""
from __future__ import annotations

import logging
from datetime import datetime

from tech_news.db.time import isoformat_utc
from tech_news.models.post import Post
from tech_news.repositories.post_repo import PostRepository
from tech_news.schemas.forms import PostForm
from tech_news.services.sanitizer import strip_all_tags

__all__ = [
    "PostValidationError",
    "clean_post_form",
    "create_post",
    "delete_post",
    "update_post",
]

logger = logging.getLogger(__name__)


class PostValidationError(ValueError):
    """Raised when a post form is missing its title or content."""

    def __init__(self, errors: list[str], form: PostForm) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors
        self.form = form


def clean_post_form(form: PostForm) -> PostForm:
    """Trim and strip every HTML tag from the title and content.

    Raises:
        PostValidationError: If either field is empty after cleaning. The
            cleaned values are attached so the form can be re-filled.
    """
    cleaned = PostForm(
        title=strip_all_tags(form.title.strip()),
        content=strip_all_tags(form.content.strip()),
    )

    errors: list[str] = []
    if not cleaned.title:
        errors.append("You must provide a title.")
    if not cleaned.content:
        errors.append("You must provide a content.")
    if errors:
        raise PostValidationError(errors, cleaned)
    return cleaned


def create_post(
    repo: PostRepository,
    form: PostForm,
    *,
    author_id: int,
    now: datetime | None = None,
) -> int:
    """Validate ``form`` and store it as a new post by ``author_id``.

    Returns:
        Identifier of the new post.

    Raises:
        PostValidationError: If the form fails validation.
    """
    cleaned = clean_post_form(form)
    post_id = repo.create(
        title=cleaned.title,
        content=cleaned.content,
        author_id=author_id,
        created_date=isoformat_utc(now),
    )
    logger.info("User %s created post %s", author_id, post_id)
    return post_id


def update_post(repo: PostRepository, post: Post, form: PostForm) -> None:
    """Validate ``form`` and replace the title and content of ``post``.

    Ownership must already have been checked by the caller.
    """
    cleaned = clean_post_form(form)
    repo.update(post.id, title=cleaned.title, content=cleaned.content)
    logger.info("User %s updated post %s", post.author_id, post.id)


def delete_post(repo: PostRepository, post: Post) -> None:
    """Delete ``post``; ownership must already have been checked by the caller."""
    repo.delete(post.id)
    logger.info("User %s deleted post %s", post.author_id, post.id)
