"""Tests for the search endpoint."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tests.fakes import FakeIndex


def _seed(client: TestClient) -> None:
    for title in ("Test Post", "Another test", "Unrelated"):
        client.post("/blogs", json={"title": title, "content": "body", "author": "Ada", "category": "notes"})


class TestSearchEndpoint:
    def test_returns_engine_response_unmodified(self, client: TestClient) -> None:
        _seed(client)

        resp = client.get("/blogs/search", params={"query": "test"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["hits"]["total"]["value"] == 2
        hit = body["hits"]["hits"][0]
        assert set(hit) == {"_index", "_id", "_score", "_source"}
        assert hit["_source"]["title"] == "Test Post"

    def test_parameters_forwarded(self, client: TestClient, index: FakeIndex) -> None:
        client.get(
            "/blogs/search",
            params={"query": "test", "startDate": "2024-01-01", "endDate": "2024-12-31", "page": "2", "size": "5"},
        )

        criteria = index.searches[-1]
        assert criteria.query == "test"
        assert criteria.start_date == "2024-01-01"
        assert criteria.end_date == "2024-12-31"
        assert criteria.offset == 5
        assert criteria.limit == 5

    def test_defaults(self, client: TestClient, index: FakeIndex) -> None:
        client.get("/blogs/search")

        criteria = index.searches[-1]
        assert criteria.query == ""
        assert criteria.start_date is None
        assert criteria.page == 1
        assert criteria.size == 10

    def test_bad_pagination_falls_back(self, client: TestClient, index: FakeIndex) -> None:
        resp = client.get("/blogs/search", params={"page": "first", "size": "-1"})
        assert resp.status_code == 200
        assert index.searches[-1].page == 1
        assert index.searches[-1].size == 10

    def test_pagination_slices_hits(self, client: TestClient) -> None:
        _seed(client)
        body = client.get("/blogs/search", params={"page": "2", "size": "2"}).json()
        assert body["hits"]["total"]["value"] == 3
        assert [h["_source"]["title"] for h in body["hits"]["hits"]] == ["Unrelated"]

    def test_not_taken_for_blog_id(self, client: TestClient) -> None:
        assert client.get("/blogs/search").status_code == 200

    def test_index_failure(self, client: TestClient, index: FakeIndex) -> None:
        index.fail.add("search")
        resp = client.get("/blogs/search", params={"query": "test"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to search blogs"}
