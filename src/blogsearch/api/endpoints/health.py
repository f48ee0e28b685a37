"""Health check endpoint — Database and search index status."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from blogsearch import __version__
from blogsearch.adapters.base.adapter import IndexHealth
from blogsearch.api.deps import get_service
from blogsearch.core.service import BlogService

router = APIRouter()


class HealthResponse(BaseModel):
    """System health check response."""

    status: str = Field(description="'healthy' when both stores respond, otherwise 'degraded'")
    version: str = Field(description="Server version")
    service: str = Field(description="Service name ('blogsearch')")
    database: str = Field(description="'connected' or 'disconnected'")
    search_index: IndexHealth = Field(description="Search cluster health")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="System Health Check",
    tags=["health"],
)
async def health_check(service: BlogService = Depends(get_service)) -> HealthResponse:
    db_ok, index_health = await service.health()
    healthy = db_ok and index_health.status == "healthy"
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=__version__,
        service="blogsearch",
        database="connected" if db_ok else "disconnected",
        search_index=index_health,
    )
