"""Booking audit trail.

Write path: BookingAuditProducer -> AuditTaskQueue -> BookingAuditTaskConsumer.
Read path: BookingAuditViewerService -> translation-ready BookingAuditLogs.
"""

from booktrail.audit.access import (
    BookingAccessChecker,
    RequesterContext,
    StaticBookingAccessChecker,
)
from booktrail.audit.actors import (
    make_app_actor,
    make_attendee_actor,
    make_guest_actor,
    make_system_actor,
    make_user_actor,
)
from booktrail.audit.consumer import BookingAuditTaskConsumer, IngestResult
from booktrail.audit.errors import (
    AuditError,
    PermissionDenied,
    UndeclaredDataAccessError,
    UnsupportedVersionError,
    ValidationError,
)
from booktrail.audit.producer import BookingAuditProducer, InlineAuditTaskQueue
from booktrail.audit.resolver import ActorResolver
from booktrail.audit.viewer import BookingAuditViewerService

__all__ = [
    "ActorResolver",
    "AuditError",
    "BookingAccessChecker",
    "BookingAuditProducer",
    "BookingAuditTaskConsumer",
    "BookingAuditViewerService",
    "IngestResult",
    "InlineAuditTaskQueue",
    "PermissionDenied",
    "RequesterContext",
    "StaticBookingAccessChecker",
    "UndeclaredDataAccessError",
    "UnsupportedVersionError",
    "ValidationError",
    "make_app_actor",
    "make_attendee_actor",
    "make_guest_actor",
    "make_system_actor",
    "make_user_actor",
]
