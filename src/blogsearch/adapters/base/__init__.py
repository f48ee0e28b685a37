"""Base adapter interface — Abstract classes for search index backends."""

from blogsearch.adapters.base.adapter import IndexHealth, SearchAdapter
from blogsearch.adapters.base.registry import create_adapter

__all__ = ["IndexHealth", "SearchAdapter", "create_adapter"]
