"""Blog store — CRUD access to the ``blogs`` table.

SQLAlchemy sessions are synchronous; every public method runs its
database work in a worker thread so callers can await it from request
handlers. Each call uses its own short-lived session and commits before
returning, so no transaction ever spans two calls.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from blogsearch.core.exceptions import NotFoundError, PersistenceError
from blogsearch.models.blog import BlogInput, BlogRecord
from blogsearch.store.database import Base, check_connection, make_engine, make_session_factory
from blogsearch.store.models import BlogRow

if TYPE_CHECKING:
    from blogsearch.config.settings import DatabaseSettings

logger = logging.getLogger(__name__)


class BlogStore:
    """Relational store adapter for blogs.

    Args:
        url: SQLAlchemy database URL.
        echo: Log every SQL statement.
        **engine_kwargs: Forwarded to ``create_engine``.
    """

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs: Any) -> None:
        self._engine = make_engine(url, echo=echo, **engine_kwargs)
        self._sessions = make_session_factory(self._engine)

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> BlogStore:
        return cls(settings.url, echo=settings.echo)

    # ── Lifecycle ────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Create the schema if needed and verify the connection.

        Raises:
            PersistenceError: If the database is unreachable or the schema
                cannot be created.
        """
        await asyncio.to_thread(self._migrate)
        logger.info("Connected to database and migrated schema")

    def _migrate(self) -> None:
        try:
            Base.metadata.create_all(bind=self._engine)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to connect to database: {e}") from e

    async def shutdown(self) -> None:
        await asyncio.to_thread(self._engine.dispose)

    async def ping(self) -> bool:
        return await asyncio.to_thread(check_connection, self._engine)

    # ── CRUD ─────────────────────────────────────────────────────────────

    async def create(self, data: BlogInput) -> BlogRecord:
        """Insert a new blog; the store assigns ``id`` and ``created_at``."""
        return await asyncio.to_thread(self._create, data)

    def _create(self, data: BlogInput) -> BlogRecord:
        try:
            with self._sessions() as session:
                row = BlogRow(**data.model_dump())
                session.add(row)
                session.commit()
                return BlogRecord.model_validate(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Insert failed: {e}") from e

    async def get(self, blog_id: int) -> BlogRecord:
        """Fetch a blog by id.

        Raises:
            NotFoundError: If no row has this id.
        """
        return await asyncio.to_thread(self._get, blog_id)

    def _get(self, blog_id: int) -> BlogRecord:
        try:
            with self._sessions() as session:
                row = session.get(BlogRow, blog_id)
                if row is None:
                    raise NotFoundError("Blog not found")
                return BlogRecord.model_validate(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Lookup failed: {e}") from e

    async def save(self, record: BlogRecord) -> BlogRecord:
        """Write every field of ``record`` to the row with the same id.

        Merge semantics: the last writer wins, and a row deleted in the
        meantime is written back.
        """
        return await asyncio.to_thread(self._save, record)

    def _save(self, record: BlogRecord) -> BlogRecord:
        try:
            with self._sessions() as session:
                row = session.merge(BlogRow(**record.model_dump()))
                session.commit()
                return BlogRecord.model_validate(row)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Update failed: {e}") from e

    async def delete(self, blog_id: int) -> None:
        """Delete a blog by id. Deleting a missing id is a no-op."""
        await asyncio.to_thread(self._delete, blog_id)

    def _delete(self, blog_id: int) -> None:
        try:
            with self._sessions() as session:
                result = session.execute(delete(BlogRow).where(BlogRow.id == blog_id))
                session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Delete failed: {e}") from e
        if result.rowcount == 0:
            logger.debug("Delete of blog %d matched no rows", blog_id)
