"""
Blog database model.

The row mirrors ``BlogRecord``; ``created_at`` is written once on insert.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from blogsearch.store.database import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BlogRow(Base):
    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    author = Column(String(100), nullable=False)
    category = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
