"""blogsearch — Blog CRUD service with a mirrored full-text search index."""

__version__ = "0.1.0"
