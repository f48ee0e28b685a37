"""API router — Blog CRUD, search, and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from blogsearch.api.endpoints.blogs import router as blogs_router
from blogsearch.api.endpoints.health import router as health_router

router = APIRouter()
router.include_router(blogs_router)
router.include_router(health_router)
