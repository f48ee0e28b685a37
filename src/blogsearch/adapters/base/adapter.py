"""Base search adapter — Abstract interface for search index backends.

A backend is responsible for:
  1. Connecting to the search cluster and creating the blog index
  2. Writing (upsert) and removing blog documents keyed by blog id
  3. Executing filtered, paginated searches and returning the raw response
  4. Reporting health status
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from blogsearch.models.search import SearchCriteria

SEARCH_FIELDS: tuple[str, ...] = ("title", "content")

BLOG_MAPPINGS: dict[str, Any] = {
    "properties": {
        "title": {"type": "text"},
        "content": {"type": "text"},
        "author": {"type": "keyword"},
        "category": {"type": "keyword"},
        "createdAt": {"type": "date"},
    }
}


class IndexHealth(BaseModel):
    """Health status of the search index."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


def build_search_body(criteria: SearchCriteria) -> dict[str, Any]:
    """Translate search criteria into a query DSL request body.

    Elasticsearch and OpenSearch share this DSL.
    """
    if criteria.query:
        must: list[dict[str, Any]] = [
            {"multi_match": {"query": criteria.query, "fields": list(SEARCH_FIELDS)}}
        ]
    else:
        # No query lists every blog rather than matching nothing.
        must = [{"match_all": {}}]

    bool_query: dict[str, Any] = {"must": must}

    date_range = {
        op: bound for op, bound in (("gte", criteria.start_date), ("lte", criteria.end_date)) if bound
    }
    if date_range:
        bool_query["filter"] = [{"range": {"createdAt": date_range}}]

    return {
        "from": criteria.offset,
        "size": criteria.limit,
        "query": {"bool": bool_query},
    }


def is_not_found(exc: Exception) -> bool:
    """Return True if a client exception reports a missing document."""
    if type(exc).__name__ == "NotFoundError":
        return True
    status = getattr(exc, "status_code", None)
    if status is None:
        status = getattr(getattr(exc, "meta", None), "status", None)
    return status == 404


class SearchAdapter(ABC):
    """Abstract base class for search index backends.

    Implementations hold one long-lived client that is shared by all
    in-flight requests; every call is a single request/response round
    trip, so no per-request state is kept.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique backend name (e.g., 'elasticsearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Connect to the cluster and make sure the blog index exists.

        May be called again after a failure; the service retries it during
        startup.

        Raises:
            IndexingError: If the cluster cannot be reached.
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the client and release resources."""

    @abstractmethod
    async def upsert(self, blog_id: int, document: dict[str, Any], *, refresh: bool = True) -> None:
        """Index ``document`` under ``blog_id``, replacing any existing document.

        Args:
            blog_id: Blog identifier, used as the document id.
            document: Full search document.
            refresh: Make the change visible to the next search immediately.

        Raises:
            IndexingError: If the write fails.
        """

    @abstractmethod
    async def delete(self, blog_id: int, *, refresh: bool = True) -> None:
        """Remove the document for ``blog_id``. A missing document is a no-op.

        Raises:
            IndexingError: If the delete fails for any other reason.
        """

    @abstractmethod
    async def search(self, criteria: SearchCriteria) -> dict[str, Any]:
        """Run a search and return the backend's response body unmodified.

        Raises:
            TransportError: If the query cannot be sent or the response
                cannot be read.
        """

    @abstractmethod
    async def health_check(self) -> IndexHealth:
        """Check the health of the search cluster."""
