"""Main entry point for the Tech News application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from tech_news.api.dependencies import RedirectToHome
from tech_news.api.routes import auth_router, pages_router, posts_router
from tech_news.api.templating import redirect
from tech_news.core.settings import settings
from tech_news.db.session import create_tables

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def configure_logging() -> None:
    """Route application logs to stderr at the configured level."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and make sure the schema exists before serving."""
    configure_logging()
    create_tables()
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    yield
    logger.info("Shutting down %s", settings.app_name)


# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Multi-user publishing with Markdown posts",
    version=settings.app_version,
    lifespan=lifespan,
    debug=settings.debug,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

app.include_router(pages_router)
app.include_router(auth_router)
app.include_router(posts_router)


@app.exception_handler(RedirectToHome)
async def redirect_to_home(request: Request, exc: RedirectToHome) -> RedirectResponse:
    """Resolve authorization and not-found failures with a redirect home."""
    return redirect("/")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("tech_news.main:app", host=settings.host, port=settings.port, reload=settings.debug)
