"""Registration, login and logout routes."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from tech_news.api.dependencies import ContextDep, PayloadDep
from tech_news.api.templating import redirect, render
from tech_news.core.settings import settings
from tech_news.models import User
from tech_news.schemas.forms import CredentialsForm
from tech_news.services import user_service
from tech_news.services.session_codec import issue_token

router = APIRouter(tags=["authentication"])


def set_session_cookie(response: Response, user: User) -> None:
    """Attach a freshly issued session token for ``user`` to ``response``."""
    response.set_cookie(
        settings.session_cookie_name,
        issue_token(user.id, user.username),
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="strict",
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie on the client."""
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="strict",
    )


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, ctx: ContextDep) -> Response:
    """Show the login form."""
    return render(request, "login.html", ctx)


@router.post("/login", response_class=HTMLResponse)
def login(request: Request, ctx: ContextDep, payload: PayloadDep) -> Response:
    """Check credentials and start a session.

    Every failure shows the same message so usernames cannot be probed.
    """
    form = CredentialsForm.model_validate(payload)
    try:
        user = user_service.authenticate(ctx.users, form)
    except user_service.InvalidCredentialsError as err:
        return render(request, "login.html", ctx, errors=err.errors, username=form.username)

    response = redirect("/")
    set_session_cookie(response, user)
    return response


@router.post("/register", response_class=HTMLResponse)
def register(request: Request, ctx: ContextDep, payload: PayloadDep) -> Response:
    """Create an account and log the new user in.

    Validation failures re-render the landing page with every broken rule.
    """
    form = CredentialsForm.model_validate(payload)
    try:
        user = user_service.register_user(ctx.users, form)
    except user_service.RegistrationError as err:
        return render(request, "index.html", ctx, errors=err.errors, username=err.username)

    response = redirect("/")
    set_session_cookie(response, user)
    return response


@router.get("/logout")
def logout() -> RedirectResponse:
    """End the session and return to the landing page."""
    response = redirect("/")
    clear_session_cookie(response)
    return response
