"""Relational store — the system of record for blogs."""

from blogsearch.store.repository import BlogStore

__all__ = ["BlogStore"]
