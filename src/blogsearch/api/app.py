"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blogsearch import __version__
from blogsearch.adapters.base.registry import create_adapter
from blogsearch.api.router import router
from blogsearch.config.settings import Settings
from blogsearch.core.exceptions import BlogServiceError
from blogsearch.core.service import BlogService
from blogsearch.observability.logging import setup_logging
from blogsearch.store.repository import BlogStore

logger = logging.getLogger(__name__)

_CONFIG_FILE = Path("blogsearch-config.yaml")


def load_settings() -> Settings:
    """Load settings from $BLOGSEARCH_CONFIG, then ./blogsearch-config.yaml, then the environment."""
    config_path = os.environ.get("BLOGSEARCH_CONFIG")
    if config_path:
        return Settings.from_yaml(config_path)
    if _CONFIG_FILE.exists():
        return Settings.from_yaml(_CONFIG_FILE)
    return Settings()


def build_service(settings: Settings) -> BlogService:
    """Construct the blog service and its store handles from settings."""
    return BlogService(
        BlogStore.from_settings(settings.database),
        create_adapter(settings.search),
        connect_attempts=settings.search.connect_attempts,
        connect_interval=settings.search.connect_interval,
    )


def create_app(settings: Settings | None = None, service: BlogService | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, see ``load_settings``.
        service: Pre-built blog service. If None, one is built from
            settings when the application starts.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = load_settings()

    setup_logging(settings.observability)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Connect both stores before serving; a failure aborts startup."""
        logger.info("Starting blogsearch v%s", __version__)

        blog_service = service or build_service(settings)
        await blog_service.initialize()

        app.state.settings = settings
        app.state.service = blog_service

        logger.info("blogsearch is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down blogsearch...")
        await blog_service.shutdown()
        app.state.service = None
        logger.info("blogsearch shutdown complete")

    app = FastAPI(
        title="blogsearch",
        description="Blog CRUD service with a mirrored full-text search index.",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BlogServiceError)
    async def blog_error_handler(request: Request, exc: BlogServiceError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    app.include_router(router)

    return app
