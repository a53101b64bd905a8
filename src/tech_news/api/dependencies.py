"""Shared API dependencies for request identity and authorization."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from tech_news.core.settings import settings
from tech_news.db.session import get_db
from tech_news.models import Post
from tech_news.repositories.post_repo import PostRepository
from tech_news.repositories.user_repo import UserRepository
from tech_news.services.session_codec import SessionClaim, decode_token

logger = logging.getLogger(__name__)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


class RedirectToHome(Exception):
    """Ends the request with a redirect to ``/``.

    Raised for anonymous access to protected routes, for missing posts and
    for non-owners. Callers cannot tell these cases apart.
    """


@dataclass(frozen=True)
class RequestContext:
    """Per-request values handed to every route handler.

    Attributes:
        db: Database session scoped to this request.
        identity: Decoded session claim, or None for anonymous requests.
    """

    db: Session
    identity: SessionClaim | None

    @property
    def posts(self) -> PostRepository:
        """Return a post repository bound to this request's session."""
        return PostRepository(self.db)

    @property
    def users(self) -> UserRepository:
        """Return a user repository bound to this request's session."""
        return UserRepository(self.db)

    def is_author(self, post: Post) -> bool:
        """Return True iff the requester wrote ``post``; anonymous is never the author."""
        return self.identity is not None and self.identity.user_id == post.author_id


def get_request_context(request: Request, db: SessionDep) -> RequestContext:
    """Decode the session cookie into an explicit request context.

    Args:
        request: Incoming request carrying the session cookie.
        db: Database session

    Returns:
        Context whose identity is None when the cookie is missing or invalid.
    """
    token = request.cookies.get(settings.session_cookie_name)
    return RequestContext(db=db, identity=decode_token(token))


# Type alias for request context dependency
ContextDep = Annotated[RequestContext, Depends(get_request_context)]


def require_authenticated(ctx: ContextDep) -> RequestContext:
    """Allow only requests carrying a valid session.

    Raises:
        RedirectToHome: If the request is anonymous.
    """
    if ctx.identity is None:
        raise RedirectToHome()
    return ctx


# Type alias for routes that need a logged-in user
AuthenticatedDep = Annotated[RequestContext, Depends(require_authenticated)]

# Largest value a SQLite INTEGER primary key can hold
MAX_POST_ID = 2**63 - 1


def parse_post_id(raw: str) -> int | None:
    """Return ``raw`` as a storable post identifier, or None if it is not one."""
    try:
        post_id = int(raw)
    except ValueError:
        return None
    return post_id if 0 < post_id <= MAX_POST_ID else None


def require_ownership(ctx: RequestContext, post: Post | None) -> Post:
    """Allow only the author of ``post`` to continue.

    Raises:
        RedirectToHome: If the post is missing or the requester is not its author.
    """
    if post is None:
        raise RedirectToHome()
    if not ctx.is_author(post):
        logger.warning(
            "User %s denied access to post %s owned by %s",
            ctx.identity.user_id if ctx.identity else None,
            post.id,
            post.author_id,
        )
        raise RedirectToHome()
    return post


def get_owned_post(post_id: str, ctx: AuthenticatedDep) -> Post:
    """Load the post named in the path and check that the requester owns it.

    Raises:
        RedirectToHome: If the id is malformed, the post is missing, or the
            requester is not its author.
    """
    parsed = parse_post_id(post_id)
    post = ctx.posts.get_by_id(parsed) if parsed is not None else None
    return require_ownership(ctx, post)


# Type alias for routes that mutate a post
OwnedPostDep = Annotated[Post, Depends(get_owned_post)]


async def read_payload(request: Request) -> dict[str, Any]:
    """Return the request body as a flat mapping.

    Form-encoded, multipart and JSON bodies are accepted. A JSON body that is
    not an object, or cannot be parsed, yields an empty mapping.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {}
        return body if isinstance(body, dict) else {}

    form = await request.form()
    return dict(form)


# Type alias for the submitted body
PayloadDep = Annotated[dict[str, Any], Depends(read_payload)]
