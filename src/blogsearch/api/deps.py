"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from fastapi import Request

from blogsearch.core.exceptions import NotFoundError
from blogsearch.core.service import BlogService


def get_service(request: Request) -> BlogService:
    """Return the blog service attached to the application.

    Raises:
        RuntimeError: If the service is not initialized.
    """
    service: BlogService | None = getattr(request.app.state, "service", None)
    if service is None:
        raise RuntimeError("Blog service not initialized. Is the server running?")
    return service


MAX_BLOG_ID = 2**31 - 1


def blog_id_or_none(blog_id: str) -> int | None:
    """Return the path id as an int, or None if it is not a storable blog id."""
    try:
        value = int(blog_id)
    except ValueError:
        return None
    return value if 1 <= value <= MAX_BLOG_ID else None


def parse_blog_id(blog_id: str) -> int:
    """Convert a path id to an int; anything that is not a storable id names no blog."""
    value = blog_id_or_none(blog_id)
    if value is None:
        raise NotFoundError("Blog not found")
    return value
