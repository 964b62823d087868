"""Base models shared by the audit domain."""

from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


def from_epoch_millis(value: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return EPOCH + timedelta(milliseconds=value)


def to_epoch_millis(value: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds, dropping microseconds."""
    return (value - EPOCH) // timedelta(milliseconds=1)


class CamelModel(BaseModel):
    """Immutable model serialized with camelCase keys.

    Producers, stored payloads and timeline views all use camelCase on the
    wire; Python code uses the snake_case attribute names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
