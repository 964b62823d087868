"""Action payload schemas, migrations and the schema registry."""

from booktrail.audit.schemas.migrations import migrate_no_show_v1_to_v2
from booktrail.audit.schemas.payloads import Change
from booktrail.audit.schemas.registry import (
    ActionSchema,
    ActionSchemaRegistry,
    build_default_registry,
)

__all__ = [
    "ActionSchema",
    "ActionSchemaRegistry",
    "Change",
    "build_default_registry",
    "migrate_no_show_v1_to_v2",
]
