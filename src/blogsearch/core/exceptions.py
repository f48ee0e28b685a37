"""Domain exceptions.

Each error class maps to the HTTP status the API reports for it. The
message is safe to show to clients; technical detail travels on the
chained ``__cause__``.
"""


class BlogServiceError(Exception):
    """Base exception for all blog service errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(BlogServiceError):
    """Raised when a request body is malformed or misses required fields."""

    status_code = 400


class NotFoundError(BlogServiceError):
    """Raised when no blog exists for the requested id."""

    status_code = 404


class PersistenceError(BlogServiceError):
    """Raised when the relational store rejects or fails an operation."""


class IndexingError(BlogServiceError):
    """Raised when writing to or deleting from the search index fails."""


class TransportError(BlogServiceError):
    """Raised when a search query cannot be sent, executed or parsed."""


class ConfigurationError(BlogServiceError):
    """Raised when the service configuration is invalid."""


class StartupError(BlogServiceError):
    """Raised when the service cannot reach one of its stores at startup."""
