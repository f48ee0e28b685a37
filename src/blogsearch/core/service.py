"""Blog service — Sequences every blog mutation across the two stores.

The relational store is the system of record; the search index holds a
denormalized copy keyed by blog id. There is no transaction spanning
both, so each operation is a straight-line sequence:

  create:  validate → store.create → index.upsert
  update:  store.get → validate → store.save → index.delete → index.upsert
  delete:  store.delete → index.delete

When a later step fails, earlier steps are not compensated. The error
raised identifies which store failed so callers can tell a blog that was
saved but not indexed from one that was never saved.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError

from blogsearch.adapters.base.adapter import IndexHealth, SearchAdapter
from blogsearch.core.exceptions import (
    ConfigurationError,
    IndexingError,
    InvalidInputError,
    PersistenceError,
    StartupError,
    TransportError,
)
from blogsearch.models.blog import BlogInput, BlogRecord
from blogsearch.models.search import SearchCriteria
from blogsearch.store.repository import BlogStore

logger = logging.getLogger(__name__)


def parse_input(payload: Any) -> BlogInput:
    """Validate a raw request payload.

    Raises:
        InvalidInputError: If the payload is not an object with all four
            fields as non-empty strings.
    """
    try:
        return BlogInput.model_validate(payload)
    except ValidationError as e:
        logger.info("Rejected blog payload: %s", e.errors(include_url=False))
        raise InvalidInputError("Invalid request body") from e


class BlogService:
    """Synchronization layer between the blog store and the search index.

    Both handles are long-lived and shared by all requests. Nothing here
    serializes concurrent requests: two updates of the same blog can
    interleave, and each store ends up with whichever write landed last.

    Args:
        store: Relational store adapter.
        index: Search index adapter.
        connect_attempts: Startup attempts to reach the search index.
        connect_interval: Seconds to wait after each failed attempt.
        sleep: Awaitable sleep, replaceable in tests.
    """

    def __init__(
        self,
        store: BlogStore,
        index: SearchAdapter,
        *,
        connect_attempts: int = 5,
        connect_interval: float = 5.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.store = store
        self.index = index
        self._connect_attempts = connect_attempts
        self._connect_interval = connect_interval
        self._sleep = sleep

    # ──────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ──────────────────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Connect both stores.

        The database is tried once; the search index is retried with a
        fixed interval.

        Raises:
            StartupError: If either store is unreachable.
        """
        try:
            await self.store.initialize()
        except PersistenceError as e:
            logger.critical("Failed to connect to the database: %s", e)
            raise StartupError(f"Failed to connect to the database: {e}") from e

        await self._connect_index()
        logger.info("Blog service initialized")

    async def _connect_index(self) -> None:
        last_error: Exception | None = None
        for attempt in range(1, self._connect_attempts + 1):
            try:
                await self.index.initialize()
            except ConfigurationError as e:
                raise StartupError(str(e)) from e
            except IndexingError as e:
                last_error = e
                logger.warning("Attempt %d: failed to connect to search index: %s", attempt, e)
                if attempt < self._connect_attempts:
                    await self._sleep(self._connect_interval)
                continue
            logger.info("Connected to search index '%s' on attempt %d", self.index.name, attempt)
            return

        logger.critical("Failed to connect to search index after %d attempts", self._connect_attempts)
        raise StartupError(
            f"Failed to connect to search index after {self._connect_attempts} attempts: {last_error}"
        ) from last_error

    async def shutdown(self) -> None:
        """Close the search client and dispose of the database engine."""
        try:
            await self.index.shutdown()
        finally:
            await self.store.shutdown()
        logger.info("Blog service shut down")

    async def health(self) -> tuple[bool, IndexHealth]:
        """Return database connectivity and search index health."""
        db_ok, index_health = await asyncio.gather(self.store.ping(), self.index.health_check())
        return db_ok, index_health

    # ──────────────────────────────────────────────────────────────────────
    # Operations
    # ──────────────────────────────────────────────────────────────────────

    async def create(self, payload: Any) -> BlogRecord:
        """Create a blog and mirror it into the search index.

        Raises:
            InvalidInputError: Payload failed validation; nothing written.
            PersistenceError: The insert failed; nothing written.
            IndexingError: The blog was saved but is not searchable.
        """
        data = parse_input(payload)

        try:
            record = await self.store.create(data)
        except PersistenceError as e:
            logger.error("Blog insert failed: %s", e)
            raise PersistenceError("Failed to create blog") from e

        try:
            await self.index.upsert(record.id, record.to_document(), refresh=True)
        except IndexingError as e:
            logger.error("Blog %d saved but not indexed: %s", record.id, e)
            raise IndexingError("Failed to index blog in search index") from e

        logger.info("Created blog %d", record.id)
        return record

    async def get(self, blog_id: int) -> BlogRecord:
        """Fetch a blog from the relational store.

        Raises:
            NotFoundError: No blog has this id.
        """
        return await self.store.get(blog_id)

    async def update(self, blog_id: int, payload: Any) -> BlogRecord:
        """Replace all mutable fields of a blog and re-index it.

        ``id`` and ``created_at`` are kept from the stored record. The
        database write happens before the index is touched, so a failed
        write leaves the old document searchable.

        Raises:
            NotFoundError: No blog has this id; the index is not touched.
            InvalidInputError: Payload failed validation.
            PersistenceError: The database write failed.
            IndexingError: The database was updated but the index was not
                (fully) refreshed.
        """
        existing = await self.store.get(blog_id)
        data = parse_input(payload)

        updated = existing.model_copy(update=data.model_dump())
        try:
            record = await self.store.save(updated)
        except PersistenceError as e:
            logger.error("Blog %d update failed: %s", blog_id, e)
            raise PersistenceError("Failed to update blog in the database") from e

        try:
            await self.index.delete(record.id, refresh=True)
        except IndexingError as e:
            logger.error("Blog %d updated but old document not removed: %s", record.id, e)
            raise IndexingError("Failed to delete previous blog version from search index") from e

        try:
            await self.index.upsert(record.id, record.to_document(), refresh=True)
        except IndexingError as e:
            logger.error("Blog %d updated but not re-indexed: %s", record.id, e)
            raise IndexingError("Failed to index updated blog in search index") from e

        logger.info("Updated blog %d", record.id)
        return record

    async def delete(self, blog_id: int) -> None:
        """Delete a blog from both stores.

        Raises:
            PersistenceError: The database delete failed; nothing removed.
            IndexingError: The blog is gone from the database but its search
                document may remain.
        """
        try:
            await self.store.delete(blog_id)
        except PersistenceError as e:
            logger.error("Blog %d delete failed: %s", blog_id, e)
            raise PersistenceError("Failed to delete blog from the database") from e

        try:
            await self.index.delete(blog_id, refresh=True)
        except IndexingError as e:
            logger.error("Blog %d deleted but search document may remain: %s", blog_id, e)
            raise IndexingError("Failed to delete blog from search index") from e

        logger.info("Deleted blog %d", blog_id)

    async def search(self, criteria: SearchCriteria) -> dict[str, Any]:
        """Search the index and return the backend response unmodified.

        Raises:
            TransportError: The query could not be executed or parsed.
        """
        try:
            return await self.index.search(criteria)
        except TransportError as e:
            logger.error("Search failed: %s", e)
            raise TransportError("Failed to search blogs") from e
