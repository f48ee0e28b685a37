"""Search criteria model."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


def _positive_int(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value >= 1 else default


class SearchCriteria(BaseModel):
    """Filters and pagination for a blog search."""

    query: str = Field(default="", description="Free text matched against title and content")
    start_date: str | None = Field(default=None, description="Inclusive lower bound on createdAt")
    end_date: str | None = Field(default=None, description="Inclusive upper bound on createdAt")
    page: int = Field(default=DEFAULT_PAGE, ge=1, description="1-based page number")
    size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, description="Results per page")

    @classmethod
    def from_params(
        cls,
        query: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        page: str | None = None,
        size: str | None = None,
    ) -> SearchCriteria:
        """Build criteria from raw query-string values.

        Missing, non-numeric or non-positive ``page`` and ``size`` fall back
        to their defaults instead of failing the request. Empty date bounds
        are treated as absent.
        """
        return cls(
            query=query or "",
            start_date=start_date or None,
            end_date=end_date or None,
            page=_positive_int(page, DEFAULT_PAGE),
            size=_positive_int(size, DEFAULT_PAGE_SIZE),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size

    @property
    def limit(self) -> int:
        return self.size
