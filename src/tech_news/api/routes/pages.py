"""Landing page and dashboard."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from tech_news.api.dependencies import ContextDep
from tech_news.api.templating import render

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
def home(request: Request, ctx: ContextDep) -> Response:
    """Show the requester's own posts, or the registration page when anonymous."""
    if ctx.identity is None:
        return render(request, "index.html", ctx)

    posts = ctx.posts.list_by_author(ctx.identity.user_id)
    return render(request, "dashboard.html", ctx, posts=posts)
