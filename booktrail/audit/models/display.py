"""Translation-ready timeline models.

Nothing here is a rendered sentence: values carry translation keys and
parameters, raw user-entered text, or epoch timestamps. Locale and time
zone are applied by whatever renders the timeline.
"""

from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import Field

from booktrail.audit.models.base import CamelModel
from booktrail.audit.models.enums import ActionSource, ActorType, AuditAction, AuditRecordType


class TranslationWithParams(CamelModel):
    """A translation key and its interpolation parameters."""

    key: str
    params: dict[str, Any] = Field(default_factory=dict)


class TextValue(CamelModel):
    """Verbatim text (emails, free-form reasons)."""

    type: Literal["text"] = "text"
    value: str


class TextListValue(CamelModel):
    """A list of verbatim values, rendered as a list."""

    type: Literal["textList"] = "textList"
    values: list[str]


class TranslationValue(CamelModel):
    """A single translated value."""

    type: Literal["translation"] = "translation"
    key: str
    params: dict[str, Any] = Field(default_factory=dict)


class TranslationsWithParamsValue(CamelModel):
    """Several translated values shown under one label."""

    type: Literal["translationsWithParams"] = "translationsWithParams"
    values_with_params: list[TranslationWithParams]


class DateTimeValue(CamelModel):
    """A point in time as epoch milliseconds."""

    type: Literal["dateTime"] = "dateTime"
    value: int


class ChangeValue(CamelModel):
    """Old and new value of a changed attribute.

    format tells the renderer how to present both sides: verbatim text,
    epoch-millis timestamps, or translation keys.
    """

    type: Literal["change"] = "change"
    format: Literal["text", "dateTime", "translation"] = "text"
    old: str | int | None = None
    new: str | int | None = None


FieldValue = Annotated[
    TextValue
    | TextListValue
    | TranslationValue
    | TranslationsWithParamsValue
    | DateTimeValue
    | ChangeValue,
    Field(discriminator="type"),
]


class DisplayField(CamelModel):
    """A labelled value in a timeline entry."""

    label_key: str
    field_value: FieldValue


class TitleComponent(CamelModel):
    """Interactive part of a title, e.g. a link to a related booking."""

    type: Literal["link"] = "link"
    text_key: str
    href: str


class DisplayTitle(CamelModel):
    """Headline of a timeline entry."""

    key: str
    params: dict[str, Any] = Field(default_factory=dict)
    components: list[TitleComponent] | None = None


class ActorDisplay(CamelModel):
    """Who performed the action, as shown in the timeline."""

    id: UUID | None = None
    type: ActorType | None = None
    display_name: str
    display_email: str | None = None
    avatar_url: str | None = None


class AuditLogView(CamelModel):
    """One rendered timeline entry."""

    id: UUID
    booking_uid: str
    action: AuditAction | str = Field(..., union_mode="left_to_right")
    type: AuditRecordType
    source: ActionSource | str = Field(..., union_mode="left_to_right")
    timestamp: int = Field(..., description="Epoch milliseconds")
    actor: ActorDisplay
    display_title: DisplayTitle
    display_fields: list[DisplayField]
    display_json: dict[str, Any] = Field(default_factory=dict)


class BookingAuditLogs(CamelModel):
    """Ordered timeline for one booking."""

    booking_uid: str
    audit_logs: list[AuditLogView] = Field(default_factory=list)
