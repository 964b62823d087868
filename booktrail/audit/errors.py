"""Audit domain errors.

Write-path errors reject the whole write. Read-path errors either fail
the read (authorization, unknown schema version) or are isolated to a
single record by the viewer.
"""


class AuditError(Exception):
    """Base exception for the booking audit domain."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AuditError):
    """Raised when an actor reference, task envelope or payload is malformed."""

    def __init__(self, message: str, errors: list[dict] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class UnsupportedVersionError(AuditError):
    """Raised when a stored payload version has no migration path."""

    def __init__(self, action: str, version: int, current_version: int) -> None:
        super().__init__(
            f"No migration path for {action} payload version {version} "
            f"(current version is {current_version})"
        )
        self.action = action
        self.version = version
        self.current_version = current_version


class PermissionDenied(AuditError):
    """Raised when a requester may not view a booking's audit trail."""

    def __init__(self, booking_uid: str) -> None:
        super().__init__(f"Not allowed to view audit logs for booking {booking_uid}")
        self.booking_uid = booking_uid


class UndeclaredDataAccessError(AuditError):
    """Raised when a handler reads an entity it did not declare as a requirement."""

    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"Undeclared access to {kind} entry {key!r}")
        self.kind = kind
        self.key = key
