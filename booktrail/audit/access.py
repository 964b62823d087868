"""Read authorization for booking audit trails."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class RequesterContext:
    """Authenticated user asking to view a timeline."""

    user_id: int
    email: str
    user_uuid: str | None = None
    organization_id: int | None = None


class BookingAccessChecker(ABC):
    """Decides whether a requester may view a booking's audit trail."""

    @abstractmethod
    async def can_view_audit_log(self, booking_uid: str, requester: RequesterContext) -> bool:
        pass


class StaticBookingAccessChecker(BookingAccessChecker):
    """Access checker backed by fixed booking ownership maps.

    A requester may view a booking owned by their user id, or by their
    organization. Used for testing and development.
    """

    def __init__(
        self,
        booking_organizations: Mapping[str, int] | None = None,
        booking_owners: Mapping[str, int] | None = None,
    ) -> None:
        self._organizations = dict(booking_organizations or {})
        self._owners = dict(booking_owners or {})

    def grant_organization(self, booking_uid: str, organization_id: int) -> None:
        self._organizations[booking_uid] = organization_id

    def grant_owner(self, booking_uid: str, user_id: int) -> None:
        self._owners[booking_uid] = user_id

    async def can_view_audit_log(self, booking_uid: str, requester: RequesterContext) -> bool:
        if self._owners.get(booking_uid) == requester.user_id:
            return True
        organization_id = self._organizations.get(booking_uid)
        return organization_id is not None and organization_id == requester.organization_id
