"""Tests for NoShowUpdatedHandler."""

import pytest

from booktrail.audit.actions import NoShowUpdatedHandler
from booktrail.audit.enrichment import DataRequirements, EnrichmentStore, UserProjection
from booktrail.audit.errors import UndeclaredDataAccessError
from booktrail.audit.models import AuditData
from tests.factories import verify_data_requirements_contract

HOST = UserProjection(uuid="host-uuid", name="Host Name", email="host@example.com")


@pytest.fixture
def handler() -> NoShowUpdatedHandler:
    return NoShowUpdatedHandler()


def data(fields: dict) -> AuditData:
    return AuditData(version=2, fields=fields)


def store_with(*users: UserProjection, declared: set[str] | None = None) -> EnrichmentStore:
    return EnrichmentStore(
        DataRequirements(user_uuids=declared if declared is not None else {u.uuid for u in users}),
        users={u.uuid: u for u in users},
    )


class TestDataRequirements:
    """Tests for the requirement contract."""

    def test_declares_host_uuid(self, handler) -> None:
        stored = data({"host": {"userUuid": "host-uuid-789", "noShow": {"old": False, "new": True}}})

        result = verify_data_requirements_contract(handler, stored)

        assert result.errors == []
        assert result.declared.user_uuids == {"host-uuid-789"}

    def test_declares_nothing_for_attendees_only(self, handler) -> None:
        stored = data(
            {"attendeesNoShow": [{"attendeeEmail": "a@example.com", "noShow": {"old": False, "new": True}}]}
        )

        result = verify_data_requirements_contract(handler, stored)

        assert result.errors == []
        assert result.declared.is_empty()

    def test_declares_host_when_both_present(self, handler) -> None:
        stored = data(
            {
                "host": {"userUuid": "host-uuid-abc", "noShow": {"old": None, "new": True}},
                "attendeesNoShow": [{"attendeeEmail": "a@example.com", "noShow": {"old": False, "new": True}}],
            }
        )

        result = verify_data_requirements_contract(handler, stored)

        assert result.errors == []
        assert result.accessed.user_uuids == {"host-uuid-abc"}


class TestDisplayFields:
    """Tests for rendered fields."""

    def test_attendee_marked_no_show(self, handler) -> None:
        stored = data(
            {"attendeesNoShow": [{"attendeeEmail": "alice@example.com", "noShow": {"old": False, "new": True}}]}
        )

        fields = handler.get_display_fields(stored, store_with())

        assert [f.model_dump(by_alias=True) for f in fields] == [
            {
                "labelKey": "booking_audit_action.attendees",
                "fieldValue": {
                    "type": "translationsWithParams",
                    "valuesWithParams": [
                        {
                            "key": "booking_audit_action.attendee_no_show_status_yes",
                            "params": {"email": "alice@example.com"},
                        }
                    ],
                },
            }
        ]

    def test_attendee_no_show_cleared(self, handler) -> None:
        stored = data(
            {"attendeesNoShow": [{"attendeeEmail": "bob@example.com", "noShow": {"old": True, "new": False}}]}
        )

        fields = handler.get_display_fields(stored, store_with())

        value = fields[0].field_value
        assert value.values_with_params[0].key == "booking_audit_action.attendee_no_show_status_no"

    def test_multiple_attendees_keep_order(self, handler) -> None:
        stored = data(
            {
                "attendeesNoShow": [
                    {"attendeeEmail": "alice@example.com", "noShow": {"old": False, "new": True}},
                    {"attendeeEmail": "bob@example.com", "noShow": {"old": True, "new": False}},
                ]
            }
        )

        fields = handler.get_display_fields(stored, store_with())

        assert len(fields) == 1
        assert [(v.key, v.params) for v in fields[0].field_value.values_with_params] == [
            ("booking_audit_action.attendee_no_show_status_yes", {"email": "alice@example.com"}),
            ("booking_audit_action.attendee_no_show_status_no", {"email": "bob@example.com"}),
        ]

    def test_host_marked_no_show(self, handler) -> None:
        stored = data({"host": {"userUuid": "host-uuid", "noShow": {"old": False, "new": True}}})

        fields = handler.get_display_fields(stored, store_with(HOST))

        assert [f.model_dump(by_alias=True) for f in fields] == [
            {
                "labelKey": "booking_audit_action.host",
                "fieldValue": {
                    "type": "translationsWithParams",
                    "valuesWithParams": [
                        {
                            "key": "booking_audit_action.host_no_show_status_yes",
                            "params": {"name": "Host Name"},
                        }
                    ],
                },
            }
        ]

    def test_host_no_show_cleared(self, handler) -> None:
        stored = data({"host": {"userUuid": "host-uuid", "noShow": {"old": True, "new": False}}})

        fields = handler.get_display_fields(stored, store_with(HOST))

        assert fields[0].field_value.values_with_params[0].key == (
            "booking_audit_action.host_no_show_status_no"
        )

    def test_unknown_host_falls_back(self, handler) -> None:
        stored = data({"host": {"userUuid": "missing-uuid", "noShow": {"old": False, "new": True}}})

        fields = handler.get_display_fields(stored, store_with(declared={"missing-uuid"}))

        assert fields[0].field_value.values_with_params[0].params == {"name": "Unknown"}

    def test_attendees_before_host(self, handler) -> None:
        stored = data(
            {
                "host": {"userUuid": "host-uuid", "noShow": {"old": None, "new": True}},
                "attendeesNoShow": [{"attendeeEmail": "alice@example.com", "noShow": {"old": False, "new": True}}],
            }
        )

        fields = handler.get_display_fields(stored, store_with(HOST))

        assert [f.label_key for f in fields] == [
            "booking_audit_action.attendees",
            "booking_audit_action.host",
        ]
        assert all(f.field_value.type == "translationsWithParams" for f in fields)

    def test_undeclared_host_lookup_is_rejected(self, handler) -> None:
        stored = data({"host": {"userUuid": "host-uuid", "noShow": {"old": False, "new": True}}})

        with pytest.raises(UndeclaredDataAccessError):
            handler.get_display_fields(stored, store_with(HOST, declared=set()))


class TestDisplayJson:
    """Tests for the raw detail view."""

    def test_exposes_host_flags(self, handler) -> None:
        stored = data({"host": {"userUuid": "host-uuid", "noShow": {"old": None, "new": True}}})

        result = handler.get_display_json(stored)

        assert result["hostNoShow"] is True
        assert result["previousHostNoShow"] is None
        assert "attendeesNoShow" not in result

    def test_exposes_attendees(self, handler) -> None:
        stored = data(
            {"attendeesNoShow": [{"attendeeEmail": "a@example.com", "noShow": {"old": None, "new": True}}]}
        )

        result = handler.get_display_json(stored)

        assert result["attendeesNoShow"] == [
            {"attendeeEmail": "a@example.com", "noShow": {"old": None, "new": True}}
        ]
        assert "hostNoShow" not in result
