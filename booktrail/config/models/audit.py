"""Booking audit feature configuration."""

from pydantic import BaseModel, Field


class AuditConfig(BaseModel):
    """Controls which organizations emit audit records.

    Booking audit is an organization-level feature: producers only queue
    tasks for bookings whose organization has it enabled.
    """

    enabled: bool = Field(default=True, description="Master switch for audit emission")
    enabled_for_all_organizations: bool = Field(
        default=False,
        description="Emit for every organization regardless of the list below",
    )
    enabled_organization_ids: list[int] = Field(
        default_factory=list,
        description="Organizations with the booking-audit feature enabled",
    )
    unknown_entity_name: str = Field(
        default="Unknown",
        min_length=1,
        description="Shown in timelines when a referenced user or attendee no longer exists",
    )
