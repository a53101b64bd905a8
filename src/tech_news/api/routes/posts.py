"""Post routes: view, compose, edit and delete."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from tech_news.api.dependencies import (
    AuthenticatedDep,
    ContextDep,
    OwnedPostDep,
    PayloadDep,
    RedirectToHome,
    parse_post_id,
)
from tech_news.api.templating import redirect, render
from tech_news.schemas.forms import PostForm
from tech_news.services import post_service

router = APIRouter(tags=["posts"])


@router.get("/posts/{post_id}", response_class=HTMLResponse)
def view_post(post_id: str, request: Request, ctx: ContextDep) -> Response:
    """Show a single post with its author's name.

    Anonymous visitors see the post too; only the author gets edit controls.
    """
    parsed = parse_post_id(post_id)
    found = ctx.posts.get_with_author_username(parsed) if parsed is not None else None
    if found is None:
        raise RedirectToHome()

    post, author_username = found
    return render(
        request,
        "single-post.html",
        ctx,
        post=post,
        author_username=author_username,
        is_author=ctx.is_author(post),
    )


@router.get("/create-post", response_class=HTMLResponse)
def create_post_page(request: Request, ctx: AuthenticatedDep) -> Response:
    """Show the post composer."""
    return render(request, "create-post.html", ctx)


@router.post("/create-post", response_class=HTMLResponse)
def create_post(request: Request, ctx: AuthenticatedDep, payload: PayloadDep) -> Response:
    """Store a new post by the requester and show it."""
    if ctx.identity is None:
        raise RedirectToHome()
    form = PostForm.model_validate(payload)
    try:
        post_id = post_service.create_post(ctx.posts, form, author_id=ctx.identity.user_id)
    except post_service.PostValidationError as err:
        return render(request, "create-post.html", ctx, errors=err.errors, form=err.form)

    return redirect(f"/posts/{post_id}")


@router.get("/edit-post/{post_id}", response_class=HTMLResponse)
def edit_post_page(request: Request, ctx: AuthenticatedDep, post: OwnedPostDep) -> Response:
    """Show the editor pre-filled with the post."""
    form = PostForm(title=post.title, content=post.content)
    return render(request, "edit-post.html", ctx, post=post, form=form)


@router.post("/edit-post/{post_id}", response_class=HTMLResponse)
def edit_post(
    request: Request,
    ctx: AuthenticatedDep,
    post: OwnedPostDep,
    payload: PayloadDep,
) -> Response:
    """Replace the title and content of a post the requester owns."""
    form = PostForm.model_validate(payload)
    try:
        post_service.update_post(ctx.posts, post, form)
    except post_service.PostValidationError as err:
        return render(request, "edit-post.html", ctx, errors=err.errors, post=post, form=err.form)

    return redirect(f"/posts/{post.id}")


@router.post("/delete-post/{post_id}")
def delete_post(ctx: AuthenticatedDep, post: OwnedPostDep) -> RedirectResponse:
    """Delete a post the requester owns."""
    post_service.delete_post(ctx.posts, post)
    return redirect("/")
