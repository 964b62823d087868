"""Audit domain models."""

from booktrail.audit.models.actor import (
    APP_ACTOR_EMAIL_DOMAIN,
    SYSTEM_ACTOR_EMAIL,
    SYSTEM_ACTOR_NAME,
    Actor,
    ActorKey,
    ActorRef,
    AppActorRef,
    AttendeeActorRef,
    GuestActorRef,
    SystemActorRef,
    UserActorRef,
)
from booktrail.audit.models.base import CamelModel, from_epoch_millis, to_epoch_millis, utc_now
from booktrail.audit.models.display import (
    ActorDisplay,
    AuditLogView,
    BookingAuditLogs,
    ChangeValue,
    DateTimeValue,
    DisplayField,
    DisplayTitle,
    FieldValue,
    TextListValue,
    TextValue,
    TitleComponent,
    TranslationsWithParamsValue,
    TranslationValue,
    TranslationWithParams,
)
from booktrail.audit.models.enums import ActionSource, ActorType, AuditAction, AuditRecordType
from booktrail.audit.models.record import AuditData, AuditRecord
from booktrail.audit.models.task import BookingAuditTask

__all__ = [
    "APP_ACTOR_EMAIL_DOMAIN",
    "SYSTEM_ACTOR_EMAIL",
    "SYSTEM_ACTOR_NAME",
    "ActionSource",
    "Actor",
    "ActorDisplay",
    "ActorKey",
    "ActorRef",
    "ActorType",
    "AppActorRef",
    "AttendeeActorRef",
    "AuditAction",
    "AuditData",
    "AuditLogView",
    "AuditRecord",
    "AuditRecordType",
    "BookingAuditLogs",
    "BookingAuditTask",
    "CamelModel",
    "ChangeValue",
    "DateTimeValue",
    "DisplayField",
    "DisplayTitle",
    "FieldValue",
    "GuestActorRef",
    "SystemActorRef",
    "TextListValue",
    "TextValue",
    "TitleComponent",
    "TranslationValue",
    "TranslationWithParams",
    "TranslationsWithParamsValue",
    "UserActorRef",
    "from_epoch_millis",
    "to_epoch_millis",
    "utc_now",
]
