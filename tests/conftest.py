"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from blogsearch.config.settings import Settings
from blogsearch.core.service import BlogService
from blogsearch.store.repository import BlogStore
from tests.fakes import FakeIndex


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create a test Settings instance backed by a throwaway SQLite file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        database={"url": f"sqlite:///{tmp_path / 'blogs.db'}"},
        search={"connect_attempts": 3, "connect_interval": 0},
        observability={"log_format": "console", "log_level": "debug"},
    )


@pytest.fixture
async def store(settings: Settings) -> AsyncIterator[BlogStore]:
    s = BlogStore.from_settings(settings.database)
    await s.initialize()
    yield s
    await s.shutdown()


@pytest.fixture
def index() -> FakeIndex:
    return FakeIndex()


@pytest.fixture
def service(store: BlogStore, index: FakeIndex) -> BlogService:
    return BlogService(store, index, connect_attempts=3, connect_interval=0)


@pytest.fixture
def blog_payload() -> dict[str, str]:
    return {"title": "Test Post", "content": "Hello from the test suite", "author": "Ada", "category": "notes"}
