"""Jinja2 environment and response helpers shared by the HTML routes."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request, status
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from tech_news.api.dependencies import RequestContext
from tech_news.core.settings import settings
from tech_news.services.sanitizer import render_markup

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["render_markup"] = render_markup
templates.env.globals["app_name"] = settings.app_name


def render(
    request: Request,
    name: str,
    ctx: RequestContext | None = None,
    **context: Any,
) -> Response:
    """Render template ``name`` with the requester's identity and an error list.

    Args:
        request: Incoming request.
        name: Template file name under ``templates/``.
        ctx: Request context; its identity is exposed to templates as ``user``.
        **context: Extra template variables.
    """
    context.setdefault("errors", [])
    context["user"] = ctx.identity if ctx is not None else None
    return templates.TemplateResponse(request, name, context)


def redirect(url: str) -> RedirectResponse:
    """Return a ``302 Found`` redirect so browsers follow it with GET."""
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
