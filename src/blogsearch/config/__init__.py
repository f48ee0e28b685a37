"""Application configuration."""

from blogsearch.config.settings import Settings

__all__ = ["Settings"]
