"""Test factories for booking audit models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from booktrail.audit.actions import AuditActionHandler
from booktrail.audit.enrichment import (
    AttendeeProjection,
    DataRequirements,
    EnrichmentStore,
    UserProjection,
)
from booktrail.audit.models import (
    ActionSource,
    AuditAction,
    AuditData,
    AuditRecord,
    AuditRecordType,
    utc_now,
)

# Minimal valid current-version payload per action
SAMPLE_FIELDS: dict[AuditAction, dict[str, Any]] = {
    AuditAction.CREATED: {
        "startTime": 1700000000000,
        "endTime": 1700001800000,
        "status": "ACCEPTED",
        "hostUserUuid": "host-uuid",
    },
    AuditAction.ACCEPTED: {"status": {"old": "PENDING", "new": "ACCEPTED"}},
    AuditAction.RESCHEDULE_REQUESTED: {
        "rescheduleReason": "Conflict",
        "rescheduledRequestedBy": "attendee@example.com",
    },
    AuditAction.RESCHEDULED: {
        "startTime": {"old": 1700000000000, "new": 1700100000000},
        "endTime": {"old": 1700003600000, "new": 1700103600000},
        "rescheduledToUid": {"old": None, "new": "new-booking-uid"},
    },
    AuditAction.LOCATION_CHANGED: {
        "location": {"old": "integrations:google:meet", "new": "integrations:zoom"}
    },
    AuditAction.ATTENDEE_ADDED: {"added": ["new@example.com"]},
    AuditAction.ATTENDEE_REMOVED: {
        "attendees": {"old": ["a@example.com", "b@example.com"], "new": ["a@example.com"]}
    },
    AuditAction.REASSIGNMENT: {
        "organizerUuid": {"old": "old-organizer-uuid", "new": "new-organizer-uuid"},
        "reassignmentReason": "Vacation",
        "reassignmentType": "manual",
    },
    AuditAction.NO_SHOW_UPDATED: {
        "host": {"userUuid": "host-uuid", "noShow": {"old": None, "new": True}},
        "attendeesNoShow": [
            {"attendeeEmail": "attendee@example.com", "noShow": {"old": False, "new": True}}
        ],
    },
    AuditAction.CANCELLED: {
        "cancellationReason": "Sick",
        "cancelledBy": "host@example.com",
        "status": {"old": "ACCEPTED", "new": "CANCELLED"},
    },
    AuditAction.REJECTED: {
        "rejectionReason": "Unavailable",
        "status": {"old": "PENDING", "new": "REJECTED"},
    },
    AuditAction.SEAT_BOOKED: {
        "seatReferenceUid": "seat-1",
        "attendeeEmail": "seat@example.com",
        "attendeeName": "Seat Holder",
        "startTime": 1700000000000,
        "endTime": 1700001800000,
    },
    AuditAction.SEAT_RESCHEDULED: {
        "seatReferenceUid": "seat-1",
        "attendeeEmail": "seat@example.com",
        "startTime": {"old": 1700000000000, "new": 1700100000000},
        "endTime": {"old": 1700001800000, "new": 1700101800000},
        "rescheduledToBookingUid": {"old": None, "new": "other-booking-uid"},
    },
}


def current_data(action: AuditAction, fields: dict[str, Any] | None = None) -> AuditData:
    """Stored envelope at the version the default registry writes."""
    version = 2 if action == AuditAction.NO_SHOW_UPDATED else 1
    return AuditData(version=version, fields=fields if fields is not None else SAMPLE_FIELDS[action])


class AuditTaskFactory:
    """Factory for camelCase task mappings as delivered by the queue."""

    @staticmethod
    def create(
        *,
        booking_uid: str = "booking-uid",
        actor: dict[str, Any] | None = None,
        action: AuditAction = AuditAction.ACCEPTED,
        source: ActionSource = ActionSource.WEBAPP,
        operation_id: str | None = None,
        data: dict[str, Any] | None = None,
        timestamp: int = 1700000000000,
        context: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        task: dict[str, Any] = {
            "bookingUid": booking_uid,
            "actor": actor or {"type": "USER", "userUuid": "actor-uuid"},
            "action": action.value,
            "source": source.value,
            "operationId": operation_id or str(uuid4()),
            "data": data if data is not None else SAMPLE_FIELDS[action],
            "timestamp": timestamp,
        }
        if context is not None:
            task["context"] = context
        return task


class AuditRecordFactory:
    """Factory for stored AuditRecord instances."""

    @staticmethod
    def create(
        *,
        booking_uid: str = "booking-uid",
        actor_id: UUID | None = None,
        action: AuditAction | str = AuditAction.ACCEPTED,
        record_type: AuditRecordType = AuditRecordType.RECORD_UPDATED,
        timestamp: datetime | None = None,
        source: ActionSource | str = ActionSource.WEBAPP,
        operation_id: str | None = None,
        data: AuditData | None = None,
        context: dict[str, Any] | None = None,
    ) -> AuditRecord:
        if data is None:
            data = current_data(action) if isinstance(action, AuditAction) else AuditData(version=1)
        return AuditRecord(
            booking_uid=booking_uid,
            actor_id=actor_id or uuid4(),
            action=action,
            type=record_type,
            timestamp=timestamp or utc_now(),
            source=source,
            operation_id=operation_id or str(uuid4()),
            data=data,
            context=context,
        )


class TrackingEnrichmentStore(EnrichmentStore):
    """EnrichmentStore that permits every key and records what was read."""

    def __init__(
        self,
        users: list[UserProjection] | None = None,
        attendees: list[AttendeeProjection] | None = None,
    ) -> None:
        super().__init__(
            DataRequirements(),
            users={user.uuid: user for user in users or []},
            attendees={attendee.id: attendee for attendee in attendees or []},
        )
        self.accessed = DataRequirements()

    def get_user_by_uuid(self, uuid: str) -> UserProjection | None:
        self.accessed.user_uuids.add(uuid)
        return self._users.get(uuid)

    def get_attendee_by_id(self, attendee_id: int) -> AttendeeProjection | None:
        self.accessed.attendee_ids.add(attendee_id)
        return self._attendees.get(attendee_id)


@dataclass
class ContractResult:
    """Difference between declared and actually accessed keys."""

    declared: DataRequirements
    accessed: DataRequirements
    errors: list[str] = field(default_factory=list)


def verify_data_requirements_contract(
    handler: AuditActionHandler, data: AuditData
) -> ContractResult:
    """Render with a tracking store and diff declared vs accessed keys."""
    declared = handler.get_data_requirements(data)
    store = TrackingEnrichmentStore()
    handler.get_display_fields(data, store)
    handler.get_display_title(data, store)

    result = ContractResult(declared=declared, accessed=store.accessed)
    for name in ("user_uuids", "attendee_ids"):
        declared_keys = getattr(declared, name)
        accessed_keys = getattr(store.accessed, name)
        for key in sorted(accessed_keys - declared_keys, key=str):
            result.errors.append(f"{name}: accessed but not declared: {key!r}")
        for key in sorted(declared_keys - accessed_keys, key=str):
            result.errors.append(f"{name}: declared but not accessed: {key!r}")
    return result
