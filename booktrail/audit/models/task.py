"""Inbound audit task envelope."""

from typing import Any

from pydantic import Field

from booktrail.audit.models.actor import ActorRef
from booktrail.audit.models.base import CamelModel

# 9999-12-31T23:59:59.999Z
MAX_EPOCH_MILLIS = 253_402_300_799_999
from booktrail.audit.models.enums import ActionSource, AuditAction


class BookingAuditTask(CamelModel):
    """A booking action delivered to the task consumer.

    Delivery is at-least-once; operation_id identifies the logical write.
    """

    booking_uid: str = Field(..., min_length=1)
    actor: ActorRef
    action: AuditAction
    source: ActionSource
    operation_id: str = Field(..., min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)
    timestamp: int = Field(..., ge=0, le=MAX_EPOCH_MILLIS, description="Epoch milliseconds")
    context: dict[str, Any] | None = None
