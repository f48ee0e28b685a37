"""In-memory test doubles."""

from __future__ import annotations

from typing import Any

from blogsearch.adapters.base.adapter import IndexHealth, SearchAdapter
from blogsearch.core.exceptions import IndexingError, TransportError
from blogsearch.models.search import SearchCriteria


class FakeIndex(SearchAdapter):
    """In-memory search index recording every call.

    ``fail`` names operations that raise; ``initialize_failures`` makes the
    first N ``initialize()`` calls fail.
    """

    def __init__(self) -> None:
        self.documents: dict[int, dict[str, Any]] = {}
        self.calls: list[tuple[str, int]] = []
        self.searches: list[SearchCriteria] = []
        self.fail: set[str] = set()
        self.initialize_failures = 0
        self.initialize_calls = 0
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    async def initialize(self) -> None:
        self.initialize_calls += 1
        if self.initialize_calls <= self.initialize_failures:
            raise IndexingError("cluster unreachable")

    async def shutdown(self) -> None:
        self.closed = True

    async def upsert(self, blog_id: int, document: dict[str, Any], *, refresh: bool = True) -> None:
        self.calls.append(("upsert", blog_id))
        if "upsert" in self.fail:
            raise IndexingError("upsert rejected")
        self.documents[blog_id] = dict(document)

    async def delete(self, blog_id: int, *, refresh: bool = True) -> None:
        self.calls.append(("delete", blog_id))
        if "delete" in self.fail:
            raise IndexingError("delete rejected")
        self.documents.pop(blog_id, None)

    async def search(self, criteria: SearchCriteria) -> dict[str, Any]:
        self.searches.append(criteria)
        if "search" in self.fail:
            raise TransportError("connection refused")

        terms = criteria.query.lower().split()
        hits = []
        for blog_id, doc in sorted(self.documents.items()):
            text = f"{doc['title']} {doc['content']}".lower()
            if terms and not any(term in text for term in terms):
                continue
            if criteria.start_date and doc["createdAt"] < criteria.start_date:
                continue
            if criteria.end_date and doc["createdAt"] > criteria.end_date:
                continue
            hits.append({"_index": "blogs", "_id": str(blog_id), "_score": 1.0, "_source": doc})

        page = hits[criteria.offset : criteria.offset + criteria.limit]
        return {
            "took": 1,
            "timed_out": False,
            "hits": {"total": {"value": len(hits), "relation": "eq"}, "max_score": 1.0, "hits": page},
        }

    async def health_check(self) -> IndexHealth:
        return IndexHealth(status="healthy", message="fake")

