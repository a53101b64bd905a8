"""HTML route modules."""

from .auth import router as auth_router
from .pages import router as pages_router
from .posts import router as posts_router

__all__ = [
    "auth_router",
    "pages_router",
    "posts_router",
]
