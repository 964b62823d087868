"""Step migrations for stored payloads.

Each function upgrades the camelCase fields of one version to the next.
They are pure, accept every shape that was valid at the source version,
and return already-upgraded input unchanged.
"""

from typing import Any

# Keys written by producers before host/attendee no-show were unified
_LEGACY_NO_SHOW_KEYS = ("attendeeNoShow", "noShowHost", "hostUserUuid")


def _as_change(value: Any) -> Any:
    """Bare booleans predate Change; there was no recorded old value."""
    if isinstance(value, bool):
        return {"old": None, "new": value}
    return value


def migrate_no_show_v1_to_v2(fields: dict[str, Any]) -> dict[str, Any]:
    """Converge legacy no-show shapes on host + attendeesNoShow.

    Version 1 stored any of:
      - attendeeNoShow: {attendeeEmail, noShow} for a single attendee
      - noShowHost: bool or {old, new}, with the host in hostUserUuid
      - noShow as a bare boolean
    alongside, or instead of, the current host/attendeesNoShow keys.

    Legacy keys are dropped only once converted or superseded by a current
    key. Anything that cannot be converted is carried over as stored, so a
    record that no longer validates still shows its facts in the fallback
    rendering.
    """
    result = {k: v for k, v in fields.items() if k not in _LEGACY_NO_SHOW_KEYS}

    host = fields.get("host")
    if isinstance(host, dict):
        result["host"] = {**host, "noShow": _as_change(host.get("noShow"))}
    elif "noShowHost" in fields and fields.get("hostUserUuid"):
        result["host"] = {
            "userUuid": fields["hostUserUuid"],
            "noShow": _as_change(fields["noShowHost"]),
        }
    else:
        for key in ("noShowHost", "hostUserUuid"):
            if key in fields:
                result[key] = fields[key]

    attendees = [
        {**entry, "noShow": _as_change(entry.get("noShow"))}
        for entry in fields.get("attendeesNoShow") or []
        if isinstance(entry, dict)
    ]
    legacy_attendee = fields.get("attendeeNoShow")
    if isinstance(legacy_attendee, dict) and legacy_attendee.get("attendeeEmail"):
        email = legacy_attendee["attendeeEmail"]
        if all(entry.get("attendeeEmail") != email for entry in attendees):
            attendees.append(
                {"attendeeEmail": email, "noShow": _as_change(legacy_attendee.get("noShow"))}
            )
    elif "attendeeNoShow" in fields:
        result["attendeeNoShow"] = legacy_attendee
    if attendees:
        result["attendeesNoShow"] = attendees

    return result
