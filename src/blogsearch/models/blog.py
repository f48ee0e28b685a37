"""Blog request, record and response models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BlogInput(BaseModel):
    """Client-supplied blog fields, used for both create and full update.

    Unknown keys (including ``id`` and ``createdAt``) are ignored.
    """

    title: str = Field(min_length=1, max_length=255, description="Blog title")
    content: str = Field(min_length=1, description="Blog body")
    author: str = Field(min_length=1, max_length=100, description="Author name")
    category: str = Field(min_length=1, max_length=50, description="Blog category")


class BlogRecord(BaseModel):
    """A persisted blog as returned by the relational store."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int = Field(description="Store-assigned identifier")
    title: str
    content: str
    author: str
    category: str
    created_at: datetime = Field(alias="createdAt", description="Creation timestamp (UTC)")

    @field_validator("created_at")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        # SQLite hands back naive datetimes; stored values are always UTC.
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)

    def to_document(self) -> dict[str, Any]:
        """Build the denormalized search document for this blog."""
        return {
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "category": self.category,
            "createdAt": self.created_at.isoformat(timespec="seconds"),
        }


class BlogUpdateResponse(BaseModel):
    """Response body for a successful update."""

    message: str
    blog: BlogRecord


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
