"""Audit record and the versioned payload envelope."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from booktrail.audit.models.base import CamelModel, utc_now
from booktrail.audit.models.enums import ActionSource, AuditAction, AuditRecordType


class AuditData(CamelModel):
    """Versioned payload envelope stored with every record."""

    version: int = Field(..., description="Schema version of fields")
    fields: dict[str, Any] = Field(default_factory=dict, description="Action payload")


class AuditRecord(BaseModel):
    """One immutable fact about a booking.

    booking_uid is a weak reference: records outlive the booking they
    describe. sequence is assigned by the store on insert and breaks
    ties between records sharing a timestamp.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4, description="Surrogate identifier")
    booking_uid: str = Field(..., min_length=1)
    actor_id: UUID = Field(..., description="Owning actor")
    # Stored rows may carry actions written by newer producers
    action: AuditAction | str = Field(..., union_mode="left_to_right")
    type: AuditRecordType
    timestamp: datetime
    source: ActionSource | str = Field(..., union_mode="left_to_right")
    operation_id: str = Field(..., min_length=1, description="Idempotency key")
    data: AuditData
    context: dict[str, Any] | None = Field(default=None)
    sequence: int | None = Field(default=None, description="Insertion sequence")
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def sort_key(self) -> tuple[datetime, int]:
        """Timeline ordering: timestamp, then insertion sequence."""
        return (self.timestamp, self.sequence or 0)
