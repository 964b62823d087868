"""Store error hierarchy for persistence backends.

All store implementations raise these errors so callers can handle
backend failures without knowing which backend is configured.
"""


class StoreError(Exception):
    """Base exception for all store errors.

    Backend-specific exceptions are wrapped in one of the subclasses,
    keeping the original exception on ``cause``.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConnectionError(StoreError):
    """Raised when the backend cannot be reached or a query fails.

    Examples:
        - Database connection timeout
        - Pool exhausted
        - Network errors
    """

    pass


class NotFoundError(StoreError):
    """Raised when a specific entity lookup fails."""

    pass


class ConflictError(StoreError):
    """Raised on unique constraint violation.

    The actor resolver relies on this to turn a lost insert race
    into a lookup of the winning row.
    """

    pass
