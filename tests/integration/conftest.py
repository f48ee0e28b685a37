"""Integration test fixtures — search backends running in Docker.

Expects backends to be running, for example::

    docker run -d -p 9200:9200 -e discovery.type=single-node \
        -e xpack.security.enabled=false elasticsearch:8.13.0
    docker run -d -p 9201:9200 -e discovery.type=single-node \
        -e DISABLE_SECURITY_PLUGIN=true opensearchproject/opensearch:2

Tests are skipped when a backend does not answer. Each test gets a
fresh index and a throwaway SQLite database.
"""

from __future__ import annotations

import os
import time
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path

import httpx
import pytest

from blogsearch.adapters.base.adapter import SearchAdapter
from blogsearch.core.service import BlogService
from blogsearch.store.repository import BlogStore

ELASTICSEARCH_URL = os.environ.get("BLOGSEARCH_TEST_ELASTICSEARCH_URL", "http://localhost:9200")
OPENSEARCH_URL = os.environ.get("BLOGSEARCH_TEST_OPENSEARCH_URL", "http://localhost:9201")


def _wait_for_service(url: str, timeout: float = 30.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=5)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


def _drop_index(host: str, index: str) -> None:
    httpx.delete(f"{host}/{index}", params={"ignore_unavailable": "true"}, timeout=30)


@pytest.fixture(scope="session")
def elasticsearch_ready() -> str:
    """Ensure Elasticsearch is running."""
    if not _wait_for_service(ELASTICSEARCH_URL):
        pytest.skip(f"Elasticsearch not available at {ELASTICSEARCH_URL}")
    return ELASTICSEARCH_URL


@pytest.fixture(scope="session")
def opensearch_ready() -> str:
    """Ensure OpenSearch is running."""
    if not _wait_for_service(OPENSEARCH_URL):
        pytest.skip(f"OpenSearch not available at {OPENSEARCH_URL}")
    return OPENSEARCH_URL


@pytest.fixture
def index_name() -> str:
    return f"blogs-test-{uuid.uuid4().hex[:8]}"


@pytest.fixture
async def live_service(
    tmp_path: Path, index_name: str
) -> AsyncIterator[Callable[[SearchAdapter, str], Awaitable[BlogService]]]:
    """Factory starting a service over an adapter and a SQLite file; drops the index afterwards."""
    started: list[tuple[BlogService, str]] = []

    async def _start(adapter: SearchAdapter, host: str) -> BlogService:
        service = BlogService(
            BlogStore(f"sqlite:///{tmp_path / 'blogs.db'}"),
            adapter,
            connect_attempts=3,
            connect_interval=1,
        )
        await service.initialize()
        started.append((service, host))
        return service

    yield _start

    for service, host in started:
        await service.shutdown()
        _drop_index(host, index_name)
