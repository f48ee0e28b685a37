"""Blog endpoints — CRUD on blogs plus full-text search over the index.

Request bodies are read as raw JSON and validated by the service, so an
update of an unknown blog reports 404 even when its body is also invalid.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from blogsearch.api.deps import blog_id_or_none, get_service, parse_blog_id
from blogsearch.core.exceptions import PersistenceError
from blogsearch.core.service import BlogService
from blogsearch.models.blog import BlogInput, BlogRecord, BlogUpdateResponse, ErrorResponse, MessageResponse
from blogsearch.models.search import SearchCriteria

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blogs", tags=["blogs"])

_BLOG_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": BlogInput.model_json_schema()}},
    }
}

_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid request body"},
    404: {"model": ErrorResponse, "description": "Blog not found"},
    500: {"model": ErrorResponse, "description": "Database or search index failure"},
}


async def _read_json(request: Request) -> Any:
    """Return the decoded JSON body, or None if it is missing or malformed."""
    try:
        return await request.json()
    except ValueError:
        return None


# Registered before "/{blog_id}" so "search" is not taken for an id.
@router.get(
    "/search",
    summary="Search Blogs",
    description=(
        "Full-text search over title and content with an optional inclusive "
        "`createdAt` range. Returns the search engine response unmodified, "
        "including scores and hit metadata."
    ),
    responses={500: _ERRORS[500]},
)
async def search_blogs(
    query: str | None = Query(default=None, description="Free-text query"),
    start_date: str | None = Query(default=None, alias="startDate", description="Inclusive lower bound"),
    end_date: str | None = Query(default=None, alias="endDate", description="Inclusive upper bound"),
    page: str | None = Query(default=None, description="1-based page number (default 1)"),
    size: str | None = Query(default=None, description="Results per page (default 10)"),
    service: BlogService = Depends(get_service),
) -> dict[str, Any]:
    criteria = SearchCriteria.from_params(query, start_date, end_date, page, size)
    return await service.search(criteria)


@router.post(
    "",
    response_model=BlogRecord,
    status_code=201,
    summary="Create Blog",
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
    openapi_extra=_BLOG_BODY,
)
async def create_blog(request: Request, service: BlogService = Depends(get_service)) -> BlogRecord:
    return await service.create(await _read_json(request))


@router.get(
    "/{blog_id}",
    response_model=BlogRecord,
    summary="Get Blog",
    responses={404: _ERRORS[404]},
)
async def get_blog(blog_id: str, service: BlogService = Depends(get_service)) -> BlogRecord:
    return await service.get(parse_blog_id(blog_id))


@router.put(
    "/{blog_id}",
    response_model=BlogUpdateResponse,
    summary="Update Blog",
    description="Replace every mutable field of a blog and re-index it.",
    responses=_ERRORS,
    openapi_extra=_BLOG_BODY,
)
async def update_blog(
    blog_id: str,
    request: Request,
    service: BlogService = Depends(get_service),
) -> BlogUpdateResponse:
    blog = await service.update(parse_blog_id(blog_id), await _read_json(request))
    return BlogUpdateResponse(message="Blog updated successfully", blog=blog)


@router.delete(
    "/{blog_id}",
    response_model=MessageResponse,
    summary="Delete Blog",
    responses={500: _ERRORS[500]},
)
async def delete_blog(blog_id: str, service: BlogService = Depends(get_service)) -> MessageResponse:
    parsed = blog_id_or_none(blog_id)
    if parsed is None:
        # The database rejects ids it cannot store; report it as a failed delete.
        logger.info("Rejected delete of unstorable blog id %r", blog_id)
        raise PersistenceError("Failed to delete blog from the database")
    await service.delete(parsed)
    return MessageResponse(message="Blog deleted successfully")
