"""Elasticsearch adapter — Blog document index on Elasticsearch (v8).

Uses the async client from ``elasticsearch[async]``. Documents are keyed
by the blog id; writes and deletes can request an index refresh so the
change is visible to the very next search.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import UTC, datetime
from typing import Any

from blogsearch.adapters.base.adapter import (
    BLOG_MAPPINGS,
    IndexHealth,
    SearchAdapter,
    build_search_body,
    is_not_found,
)
from blogsearch.core.exceptions import ConfigurationError, IndexingError, TransportError
from blogsearch.models.search import SearchCriteria

logger = logging.getLogger(__name__)


class ElasticsearchAdapter(SearchAdapter):
    """Search index backend for Elasticsearch.

    Args:
        hosts: List of Elasticsearch node URLs.
        index: Name of the blog index.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        api_key: Optional API key.
        verify_certs: Whether to verify TLS certificates.
        **kwargs: Additional keyword arguments forwarded to ``AsyncElasticsearch``.
    """

    def __init__(
        self,
        hosts: list[str] | None = None,
        index: str = "blogs",
        username: str | None = None,
        password: str | None = None,
        api_key: str | None = None,
        verify_certs: bool = True,
        **kwargs: Any,
    ) -> None:
        self._hosts = hosts or ["http://localhost:9200"]
        self._index = index
        self._username = username
        self._password = password
        self._api_key = api_key
        self._verify_certs = verify_certs
        self._extra_kwargs = kwargs
        self._client: Any = None

    @property
    def name(self) -> str:
        return "elasticsearch"

    async def initialize(self) -> None:
        """Create the ``AsyncElasticsearch`` client, ping it and ensure the index."""
        if self._client is None:
            self._client = self._create_client()

        try:
            reachable = await self._client.ping()
        except Exception as e:
            raise IndexingError(f"Failed to ping Elasticsearch: {e}") from e
        if not reachable:
            raise IndexingError(f"Failed to ping Elasticsearch at {self._hosts}")

        await self._ensure_index()
        logger.info("Connected to Elasticsearch, index '%s' ready", self._index)

    def _create_client(self) -> Any:
        try:
            from elasticsearch import AsyncElasticsearch
        except ImportError as e:
            raise ConfigurationError(
                "elasticsearch package is required.  Install with: pip install 'elasticsearch[async]'"
            ) from e

        client_kwargs: dict[str, Any] = {
            "hosts": self._hosts,
            "verify_certs": self._verify_certs,
        }
        if self._api_key:
            client_kwargs["api_key"] = self._api_key
        elif self._username and self._password:
            client_kwargs["basic_auth"] = (self._username, self._password)

        client_kwargs.update(self._extra_kwargs)

        try:
            return AsyncElasticsearch(**client_kwargs)
        except Exception as e:
            raise IndexingError(f"Failed to create Elasticsearch client: {e}") from e

    async def _ensure_index(self) -> None:
        try:
            if await self._client.indices.exists(index=self._index):
                return
            await self._client.indices.create(index=self._index, mappings=BLOG_MAPPINGS)
            logger.info("Created index '%s'", self._index)
        except Exception as e:
            # Another worker may have created it between the check and the create.
            try:
                if await self._client.indices.exists(index=self._index):
                    return
            except Exception:
                logger.debug("Index existence re-check failed", exc_info=True)
            raise IndexingError(f"Failed to create index '{self._index}': {e}") from e

    async def shutdown(self) -> None:
        """Close the Elasticsearch client."""
        if self._client:
            await self._client.close()
            self._client = None

    # ── Documents ────────────────────────────────────────────────────────

    async def upsert(self, blog_id: int, document: dict[str, Any], *, refresh: bool = True) -> None:
        self._require_client()
        try:
            await self._client.index(
                index=self._index,
                id=str(blog_id),
                document=document,
                refresh=refresh,
            )
        except Exception as e:
            raise IndexingError(f"Failed to index document {blog_id}: {e}") from e

    async def delete(self, blog_id: int, *, refresh: bool = True) -> None:
        self._require_client()
        try:
            await self._client.delete(index=self._index, id=str(blog_id), refresh=refresh)
        except Exception as e:
            if is_not_found(e):
                logger.debug("Document %d not in index, nothing to delete", blog_id)
                return
            raise IndexingError(f"Failed to delete document {blog_id}: {e}") from e

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, criteria: SearchCriteria) -> dict[str, Any]:
        if not self._client:
            raise TransportError("Elasticsearch client not initialized.")

        body = build_search_body(criteria)
        logger.debug("Search query: %s", json.dumps(body))

        try:
            response = await self._client.search(
                index=self._index,
                query=body["query"],
                from_=body["from"],
                size=body["size"],
            )
        except Exception as e:
            raise TransportError(f"Elasticsearch query failed: {e}") from e

        result = getattr(response, "body", response)
        if not isinstance(result, dict):
            raise TransportError(f"Unexpected Elasticsearch response type: {type(result).__name__}")

        logger.debug("Search response: %s", json.dumps(result, default=str))
        return dict(result)

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> IndexHealth:
        """Check Elasticsearch cluster health."""
        if not self._client:
            return IndexHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            health = await self._client.cluster.health()
            latency_ms = int((time.monotonic() - start) * 1000)
        except Exception as e:
            return IndexHealth(status="unhealthy", message=str(e))

        status_map = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}
        return IndexHealth(
            status=status_map.get(health.get("status", "red"), "unhealthy"),
            latency_ms=latency_ms,
            last_check=datetime.now(UTC).isoformat(),
            message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
        )

    def _require_client(self) -> None:
        if not self._client:
            raise IndexingError("Elasticsearch client not initialized.")
