#!/usr/bin/env python3
"""Seed a sample booking audit timeline.

Writes one record for every action, using every actor type and source,
then prints the rendered timeline. Uses the configured storage backend.

Usage:
    # In-memory (default config)
    uv run python scripts/seed_booking_audit.py

    # Against PostgreSQL (run `alembic upgrade head` first)
    BOOKTRAIL_STORAGE__BACKEND=postgres uv run python scripts/seed_booking_audit.py

    # Custom ids
    uv run python scripts/seed_booking_audit.py --booking-uid my-booking --user-uuid my-user
"""

import argparse
import asyncio
import json
import time
from typing import Any
from uuid import uuid4

from booktrail.audit import (
    RequesterContext,
    StaticBookingAccessChecker,
    make_app_actor,
    make_attendee_actor,
    make_guest_actor,
    make_system_actor,
    make_user_actor,
)
from booktrail.audit.enrichment import (
    AttendeeProjection,
    InMemoryEnrichmentSource,
    UserProjection,
)
from booktrail.audit.models import ActionSource, AuditAction
from booktrail.bootstrap import bootstrap

HOUR_MS = 60 * 60 * 1000


def build_tasks(
    booking_uid: str,
    rescheduled_to_uid: str,
    user_uuid: str,
    attendee_id: int,
    attendee_email: str,
) -> list[dict[str, Any]]:
    """Camel-case task payloads, one minute apart, ending now."""
    now = int(time.time() * 1000)
    start = now + 24 * HOUR_MS
    seat_uid = str(uuid4())

    user = make_user_actor(user_uuid)
    attendee = make_attendee_actor(attendee_id)
    guest = make_guest_actor("sarah.chen@techcorp.io", "Sarah Chen")
    stripe = make_app_actor("stripe", "Stripe")

    steps: list[tuple[Any, AuditAction, ActionSource, dict[str, Any], dict[str, Any] | None]] = [
        (user, AuditAction.CREATED, ActionSource.WEBAPP, {
            "startTime": start,
            "endTime": start + HOUR_MS // 2,
            "status": "PENDING",
            "hostUserUuid": user_uuid,
            "seatReferenceUid": None,
        }, None),
        (user, AuditAction.ACCEPTED, ActionSource.WEBAPP, {
            "status": {"old": "PENDING", "new": "ACCEPTED"},
        }, None),
        (attendee, AuditAction.RESCHEDULE_REQUESTED, ActionSource.MAGIC_LINK, {
            "rescheduleReason": "Conflict with another meeting",
            "rescheduledRequestedBy": attendee_email,
        }, None),
        (user, AuditAction.RESCHEDULED, ActionSource.WEBAPP, {
            "startTime": {"old": start, "new": start + 24 * HOUR_MS},
            "endTime": {"old": start + HOUR_MS // 2, "new": start + 24 * HOUR_MS + HOUR_MS // 2},
            "rescheduledToUid": {"old": None, "new": rescheduled_to_uid},
        }, None),
        (user, AuditAction.LOCATION_CHANGED, ActionSource.WEBAPP, {
            "location": {"old": "integrations:google:meet", "new": "integrations:zoom"},
        }, None),
        (guest, AuditAction.ATTENDEE_ADDED, ActionSource.MAGIC_LINK, {
            "added": ["rachel.nguyen@designhub.co"],
        }, None),
        (user, AuditAction.ATTENDEE_REMOVED, ActionSource.WEBAPP, {
            "attendees": {
                "old": [attendee_email, "rachel.nguyen@designhub.co"],
                "new": [attendee_email],
            },
        }, None),
        (make_system_actor(), AuditAction.REASSIGNMENT, ActionSource.SYSTEM, {
            "organizerUuid": {"old": None, "new": user_uuid},
            "reassignmentReason": "Round-robin auto-reassignment",
            "reassignmentType": "roundRobin",
        }, None),
        (user, AuditAction.NO_SHOW_UPDATED, ActionSource.WEBAPP, {
            "attendeesNoShow": [{"attendeeEmail": attendee_email, "noShow": {"old": False, "new": True}}],
        }, None),
        (user, AuditAction.NO_SHOW_UPDATED, ActionSource.API_V2, {
            "host": {"userUuid": user_uuid, "noShow": {"old": None, "new": True}},
        }, {"impersonatedBy": user_uuid}),
        (stripe, AuditAction.CANCELLED, ActionSource.WEBHOOK, {
            "cancellationReason": "Payment failed - automatic cancellation",
            "cancelledBy": "stripe@app.internal",
            "status": {"old": "ACCEPTED", "new": "CANCELLED"},
        }, None),
        (user, AuditAction.REJECTED, ActionSource.API_V2, {
            "rejectionReason": "Time slot no longer available",
            "status": {"old": "PENDING", "new": "REJECTED"},
        }, None),
        (guest, AuditAction.SEAT_BOOKED, ActionSource.WEBAPP, {
            "seatReferenceUid": seat_uid,
            "attendeeEmail": "marcus.johnson@consulting.io",
            "attendeeName": "Marcus Johnson",
            "startTime": start + 24 * HOUR_MS,
            "endTime": start + 24 * HOUR_MS + HOUR_MS // 2,
        }, None),
        (attendee, AuditAction.SEAT_RESCHEDULED, ActionSource.API_V1, {
            "seatReferenceUid": seat_uid,
            "attendeeEmail": "marcus.johnson@consulting.io",
            "startTime": {"old": start + 24 * HOUR_MS, "new": start + 48 * HOUR_MS},
            "endTime": {
                "old": start + 24 * HOUR_MS + HOUR_MS // 2,
                "new": start + 48 * HOUR_MS + HOUR_MS // 2,
            },
            "rescheduledToBookingUid": {"old": None, "new": rescheduled_to_uid},
        }, None),
    ]

    tasks = []
    for index, (actor, action, source, data, context) in enumerate(steps):
        task: dict[str, Any] = {
            "bookingUid": booking_uid,
            "actor": actor.model_dump(by_alias=True),
            "action": action.value,
            "source": source.value,
            "operationId": str(uuid4()),
            "data": data,
            "timestamp": now - (len(steps) - index) * 60 * 1000,
        }
        if context is not None:
            task["context"] = context
        tasks.append(task)
    return tasks


async def main() -> int:
    parser = argparse.ArgumentParser(description="Seed a sample booking audit timeline")
    parser.add_argument("--booking-uid", default=f"seed-booking-{uuid4().hex[:8]}")
    parser.add_argument("--user-uuid", default=str(uuid4()))
    parser.add_argument("--organization-id", type=int, default=1)
    parser.add_argument("--quiet", action="store_true", help="Do not print the timeline")
    args = parser.parse_args()

    attendee_id = 1001
    attendee_email = "john.doe@example.com"
    rescheduled_to_uid = f"{args.booking_uid}-rescheduled"

    source = InMemoryEnrichmentSource(
        users=[UserProjection(uuid=args.user_uuid, name="Alex Host", email="alex@example.com")],
        attendees=[AttendeeProjection(id=attendee_id, name="John Doe", email=attendee_email)],
    )
    access = StaticBookingAccessChecker(
        booking_organizations={
            args.booking_uid: args.organization_id,
            rescheduled_to_uid: args.organization_id,
        }
    )
    stack = bootstrap(access_checker=access, enrichment_source=source)

    try:
        tasks = build_tasks(
            args.booking_uid, rescheduled_to_uid, args.user_uuid, attendee_id, attendee_email
        )
        for task in tasks:
            await stack.consumer.on_booking_action(task)
        print(f"Seeded {len(tasks)} audit records for booking {args.booking_uid}")

        if not args.quiet:
            requester = RequesterContext(
                user_id=1,
                email="alex@example.com",
                user_uuid=args.user_uuid,
                organization_id=args.organization_id,
            )
            for uid in (args.booking_uid, rescheduled_to_uid):
                timeline = await stack.viewer.get_audit_logs_for_booking(uid, requester)
                print(json.dumps(timeline.model_dump(mode="json", by_alias=True), indent=2))
    finally:
        await stack.close()

    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
