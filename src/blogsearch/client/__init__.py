"""blogsearch Python SDK — Client library for the blog API.

Quick start::

    from blogsearch.client import BlogClient

    client = BlogClient("http://localhost:8080")
    blog = client.create(title="Test Post", content="...", author="me", category="notes")
    hits = client.search("test")["hits"]["hits"]
"""

from blogsearch.client.client import AsyncBlogClient, BlogClient

__all__ = ["AsyncBlogClient", "BlogClient"]
