"""Payload models for each audit action at its current schema version.

All models use camelCase aliases, matching what producers send and what
is stored in the record's data.fields.
"""

from typing import Generic, Literal, TypeVar

from pydantic import Field, model_validator

from booktrail.audit.models.base import CamelModel

T = TypeVar("T")

EpochMillis = int


class Change(CamelModel, Generic[T]):
    """Before/after pair. old is null when there was no previous value."""

    old: T | None = None
    new: T


class CreatedFields(CamelModel):
    start_time: EpochMillis = Field(..., ge=0)
    end_time: EpochMillis = Field(..., ge=0)
    status: str = Field(..., min_length=1)
    host_user_uuid: str | None = None
    seat_reference_uid: str | None = None


class AcceptedFields(CamelModel):
    status: Change[str]


class RescheduleRequestedFields(CamelModel):
    reschedule_reason: str | None = None
    rescheduled_requested_by: str | None = None


class RescheduledFields(CamelModel):
    start_time: Change[EpochMillis]
    end_time: Change[EpochMillis]
    # new is null when the replacement booking was not created
    rescheduled_to_uid: Change[str | None]
    rescheduled_by: str | None = None


class LocationChangedFields(CamelModel):
    location: Change[str]


class AttendeeAddedFields(CamelModel):
    added: list[str] = Field(..., min_length=1)


class AttendeeRemovedFields(CamelModel):
    attendees: Change[list[str]]


class ReassignmentFields(CamelModel):
    organizer_uuid: Change[str]
    reassignment_reason: str | None = None
    reassignment_type: Literal["manual", "roundRobin"] | None = None


class HostNoShow(CamelModel):
    user_uuid: str = Field(..., min_length=1)
    no_show: Change[bool]


class AttendeeNoShow(CamelModel):
    attendee_email: str = Field(..., min_length=1)
    no_show: Change[bool]


class NoShowUpdatedFields(CamelModel):
    """Host and/or attendee no-show changes made in one operation."""

    host: HostNoShow | None = None
    attendees_no_show: list[AttendeeNoShow] | None = None

    @model_validator(mode="after")
    def require_host_or_attendees(self) -> "NoShowUpdatedFields":
        if self.host is None and not self.attendees_no_show:
            raise ValueError("host or attendeesNoShow is required")
        return self


class CancelledFields(CamelModel):
    cancellation_reason: str | None = None
    cancelled_by: str | None = None
    status: Change[str]


class RejectedFields(CamelModel):
    rejection_reason: str | None = None
    status: Change[str]


class SeatBookedFields(CamelModel):
    seat_reference_uid: str = Field(..., min_length=1)
    attendee_email: str = Field(..., min_length=1)
    attendee_name: str | None = None
    start_time: EpochMillis = Field(..., ge=0)
    end_time: EpochMillis = Field(..., ge=0)


class SeatRescheduledFields(CamelModel):
    seat_reference_uid: str = Field(..., min_length=1)
    attendee_email: str = Field(..., min_length=1)
    start_time: Change[EpochMillis]
    end_time: Change[EpochMillis]
    rescheduled_to_booking_uid: Change[str | None]
