"""API test fixtures — a TestClient running the full application lifespan."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from blogsearch.api.app import create_app
from blogsearch.config.settings import Settings
from blogsearch.core.service import BlogService
from blogsearch.store.repository import BlogStore
from tests.fakes import FakeIndex


@pytest.fixture
def client(settings: Settings, index: FakeIndex) -> Iterator[TestClient]:
    service = BlogService(BlogStore.from_settings(settings.database), index, connect_attempts=1, connect_interval=0)
    with TestClient(create_app(settings, service=service)) as c:
        yield c
