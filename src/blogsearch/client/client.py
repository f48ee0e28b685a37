"""blogsearch Python SDK — Async and sync clients for the blog REST API.

Usage::

    # Async
    async with AsyncBlogClient("http://localhost:8080") as client:
        blog = await client.create(title="A", content="B", author="C", category="D")
        hits = await client.search("test", page=1, size=5)

    # Sync (wraps async client internally)
    client = BlogClient("http://localhost:8080")
    blog = client.get(1)
"""

from __future__ import annotations

import asyncio
import concurrent.futures
from collections.abc import Coroutine
from typing import Any, TypeVar, cast

import httpx

_T = TypeVar("_T")

Blog = dict[str, Any]
"""Blog dict (mirrors the ``BlogRecord`` JSON)."""

SearchResult = dict[str, Any]
"""Raw search engine response dict."""


class AsyncBlogClient:
    """Async Python client for the blog API.

    Args:
        base_url: Server URL, e.g. ``"http://localhost:8080"``.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.

    Error responses raise ``httpx.HTTPStatusError``; the server's message
    is in ``exc.response.json()["error"]``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            **httpx_kwargs,
        )

    async def __aenter__(self) -> AsyncBlogClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        resp = await self._client.request(method, url, **kwargs)
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    async def health(self) -> dict[str, Any]:
        return await self._request("GET", "/health")

    async def create(self, *, title: str, content: str, author: str, category: str) -> Blog:
        """Create a blog and return it with its assigned ``id`` and ``createdAt``."""
        payload = {"title": title, "content": content, "author": author, "category": category}
        return await self._request("POST", "/blogs", json=payload)

    async def get(self, blog_id: int) -> Blog:
        return await self._request("GET", f"/blogs/{blog_id}")

    async def update(self, blog_id: int, *, title: str, content: str, author: str, category: str) -> Blog:
        """Replace all mutable fields of a blog and return the updated blog."""
        payload = {"title": title, "content": content, "author": author, "category": category}
        data = await self._request("PUT", f"/blogs/{blog_id}", json=payload)
        return cast(Blog, data["blog"])

    async def delete(self, blog_id: int) -> None:
        await self._request("DELETE", f"/blogs/{blog_id}")

    async def search(
        self,
        query: str | None = None,
        *,
        start_date: str | None = None,
        end_date: str | None = None,
        page: int | None = None,
        size: int | None = None,
    ) -> SearchResult:
        """Search blogs; returns the search engine response as-is.

        Args:
            query: Free text matched against title and content.
            start_date: Inclusive lower bound on ``createdAt`` (ISO-8601).
            end_date: Inclusive upper bound on ``createdAt`` (ISO-8601).
            page: 1-based page number.
            size: Results per page.
        """
        params = {
            "query": query,
            "startDate": start_date,
            "endDate": end_date,
            "page": page,
            "size": size,
        }
        return await self._request(
            "GET", "/blogs/search", params={k: v for k, v in params.items() if v is not None}
        )


class BlogClient:
    """Synchronous Python client for the blog API.

    Wraps :class:`AsyncBlogClient` using ``asyncio.run``; each call opens
    and closes its own connection.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._httpx_kwargs = httpx_kwargs

    def _run(self, coro: Coroutine[Any, Any, _T]) -> _T:
        """Run an async coroutine synchronously."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)
        # Already inside an event loop (e.g. Jupyter): run in a separate thread.
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()

    def _call(self, method: str, *args: Any, **kwargs: Any) -> Any:
        async def _go() -> Any:
            async with AsyncBlogClient(self._base_url, timeout=self._timeout, **self._httpx_kwargs) as c:
                return await getattr(c, method)(*args, **kwargs)

        return self._run(_go())

    def health(self) -> dict[str, Any]:
        return cast(dict[str, Any], self._call("health"))

    def create(self, *, title: str, content: str, author: str, category: str) -> Blog:
        return cast(Blog, self._call("create", title=title, content=content, author=author, category=category))

    def get(self, blog_id: int) -> Blog:
        return cast(Blog, self._call("get", blog_id))

    def update(self, blog_id: int, *, title: str, content: str, author: str, category: str) -> Blog:
        return cast(
            Blog,
            self._call("update", blog_id, title=title, content=content, author=author, category=category),
        )

    def delete(self, blog_id: int) -> None:
        self._call("delete", blog_id)

    def search(self, query: str | None = None, **kwargs: Any) -> SearchResult:
        """Search blogs. Keyword arguments as for :meth:`AsyncBlogClient.search`."""
        return cast(SearchResult, self._call("search", query, **kwargs))
