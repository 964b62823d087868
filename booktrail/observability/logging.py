"""Structured logging for booktrail using structlog.

JSON output for deployments and console output for development. Audit
events carry attendee and guest emails both under snake_case log keys and
inside camelCase payloads and validation errors, so sensitive keys are
matched with case and separators ignored.
"""

import logging
import re
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

REDACTED = "[REDACTED]"

# Normalized names: lowercase, no "_" or "-"
SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password",
    "secret",
    "token",
    "accesstoken",
    "refreshtoken",
    "apikey",
    "authorization",
    "credential",
    "phone",
    "email",
    "emails",
    "attendeeemail",
    "guestemail",
    "hostemail",
    "attendeename",
    "guestname",
})

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"\+?[\d\s\-\(\)]{10,}")


def normalize_key(key: str) -> str:
    """attendee_email, attendeeEmail and Attendee-Email all normalize alike."""
    return key.replace("_", "").replace("-", "").lower()


def is_sensitive_key(key: Any) -> bool:
    return isinstance(key, str) and normalize_key(key) in SENSITIVE_KEYS


class PIIRedactor:
    """Processor that redacts PII from log events.

    Values under a sensitive key are replaced outright. Every other string,
    however deeply nested in payloads or validation errors, has emails and
    phone numbers masked.
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        return cast(EventDict, self._redact(event_dict))

    def _redact(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {
                key: REDACTED if is_sensitive_key(key) else self._redact(item)
                for key, item in value.items()
            }
        if isinstance(value, list | tuple):
            return [self._redact(item) for item in value]
        if isinstance(value, str):
            return PHONE_PATTERN.sub("[PHONE]", EMAIL_PATTERN.sub("[EMAIL]", value))
        return value


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    redact_pii: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level name; unknown names fall back to INFO
        format: "json" for deployments, "console" for development
        redact_pii: Whether to redact PII from logs
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if redact_pii:
        processors.append(PIIRedactor())

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    level_num = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


@contextmanager
def audit_log_context(**identifiers: Any) -> Iterator[None]:
    """Bind booking and operation identifiers to every log line in the block.

    None values are left out, so optional identifiers never show up empty.
    """
    bound = {key: value for key, value in identifiers.items() if value is not None}
    with structlog.contextvars.bound_contextvars(**bound):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound to a module name."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
