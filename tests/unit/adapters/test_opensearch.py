"""Tests for the OpenSearch adapter."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from blogsearch.adapters.base.adapter import BLOG_MAPPINGS
from blogsearch.adapters.opensearch.adapter import OpenSearchAdapter
from blogsearch.core.exceptions import ConfigurationError, IndexingError, TransportError
from blogsearch.models.search import SearchCriteria

# ── Fixtures ──────────────────────────────────────────────────────────────────


class NotFoundError(Exception):
    pass


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock()
    client.ping = AsyncMock(return_value=True)
    client.indices.exists = AsyncMock(return_value=True)
    client.indices.create = AsyncMock()
    client.index = AsyncMock()
    client.delete = AsyncMock()
    client.search = AsyncMock(return_value={"hits": {"total": {"value": 0}, "hits": []}})
    client.cluster.health = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def adapter(mock_client: MagicMock) -> OpenSearchAdapter:
    a = OpenSearchAdapter(hosts=["https://localhost:9200"], index="test-blogs")
    a._client = mock_client
    return a


# ── Properties ───────────────────────────────────────────────────────────────


class TestOpenSearchAdapterProperties:
    def test_name(self, adapter: OpenSearchAdapter) -> None:
        assert adapter.name == "opensearch"

    def test_default_hosts(self) -> None:
        a = OpenSearchAdapter()
        assert a._hosts == ["https://localhost:9200"]


# ── Initialization ───────────────────────────────────────────────────────────


class TestOpenSearchInitialization:
    async def test_initialize_missing_package_raises(self) -> None:
        adapter = OpenSearchAdapter()
        with patch.dict("sys.modules", {"opensearchpy": None}), pytest.raises(ConfigurationError):
            await adapter.initialize()

    async def test_initialize_creates_index(self, adapter: OpenSearchAdapter, mock_client: MagicMock) -> None:
        mock_client.indices.exists.return_value = False
        await adapter.initialize()
        mock_client.indices.create.assert_awaited_once_with(index="test-blogs", body={"mappings": BLOG_MAPPINGS})

    async def test_initialize_ping_false(self, adapter: OpenSearchAdapter, mock_client: MagicMock) -> None:
        mock_client.ping.return_value = False
        with pytest.raises(IndexingError):
            await adapter.initialize()

    async def test_shutdown_closes_client(self, adapter: OpenSearchAdapter, mock_client: MagicMock) -> None:
        await adapter.shutdown()
        mock_client.close.assert_awaited_once()
        assert adapter._client is None


# ── Documents ────────────────────────────────────────────────────────────────


class TestOpenSearchDocuments:
    async def test_upsert(self, adapter: OpenSearchAdapter, mock_client: MagicMock) -> None:
        await adapter.upsert(3, {"title": "T"})
        mock_client.index.assert_awaited_once_with(index="test-blogs", id="3", body={"title": "T"}, refresh="true")

    async def test_delete_without_refresh(self, adapter: OpenSearchAdapter, mock_client: MagicMock) -> None:
        await adapter.delete(3, refresh=False)
        mock_client.delete.assert_awaited_once_with(index="test-blogs", id="3", refresh="false")

    async def test_delete_missing_document_is_noop(self, adapter: OpenSearchAdapter, mock_client: MagicMock) -> None:
        mock_client.delete.side_effect = NotFoundError(404, "not_found")
        await adapter.delete(3)

    async def test_delete_failure(self, adapter: OpenSearchAdapter, mock_client: MagicMock) -> None:
        mock_client.delete.side_effect = RuntimeError("boom")
        with pytest.raises(IndexingError):
            await adapter.delete(3)


# ── Search ───────────────────────────────────────────────────────────────────


class TestOpenSearchSearch:
    async def test_search_sends_dsl_body(self, adapter: OpenSearchAdapter, mock_client: MagicMock) -> None:
        result = await adapter.search(SearchCriteria(query="test", start_date="2024-01-01", page=2, size=5))

        assert result == {"hits": {"total": {"value": 0}, "hits": []}}
        body = mock_client.search.await_args.kwargs["body"]
        assert body["from"] == 5
        assert body["size"] == 5
        assert body["query"]["bool"]["filter"] == [{"range": {"createdAt": {"gte": "2024-01-01"}}}]

    async def test_search_failure(self, adapter: OpenSearchAdapter, mock_client: MagicMock) -> None:
        mock_client.search.side_effect = ConnectionError("refused")
        with pytest.raises(TransportError):
            await adapter.search(SearchCriteria(query="x"))


# ── Health ───────────────────────────────────────────────────────────────────


class TestOpenSearchHealth:
    async def test_red_is_unhealthy(self, adapter: OpenSearchAdapter, mock_client: MagicMock) -> None:
        mock_client.cluster.health.return_value = {"status": "red"}
        assert (await adapter.health_check()).status == "unhealthy"

    async def test_green_is_healthy(self, adapter: OpenSearchAdapter, mock_client: MagicMock) -> None:
        mock_client.cluster.health.return_value = {"status": "green", "cluster_name": "c", "number_of_nodes": 3}
        health = await adapter.health_check()
        assert health.status == "healthy"
        assert "Nodes: 3" in (health.message or "")
