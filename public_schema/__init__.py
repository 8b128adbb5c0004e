"""
public-schema - field-level visibility for graphene-django schemas.

Declarations marked ``@private`` (or flagged through ``mark_private``) are
removed from introspection results and rejected when an operation uses them.
"""

__version__ = "1.0.0"

from .markers import (
    PRIVATE_DIRECTIVE_NAME,
    PRIVATE_DIRECTIVE_SDL,
    is_marked_private,
    mark_private,
    private_directive,
)
from .redactor import redact_introspection_result, selects_introspection
from .registry import TOP_LEVEL_OWNER, PrivateFieldRecord, VisibilityRegistry
from .rules import PrivateFieldValidationRule, create_private_field_rule
from .scanner import SchemaScanner, scan_schema

__all__ = [
    "PRIVATE_DIRECTIVE_NAME",
    "PRIVATE_DIRECTIVE_SDL",
    "PrivateFieldRecord",
    "PrivateFieldValidationRule",
    "SchemaScanner",
    "TOP_LEVEL_OWNER",
    "VisibilityRegistry",
    "create_private_field_rule",
    "is_marked_private",
    "mark_private",
    "private_directive",
    "redact_introspection_result",
    "scan_schema",
    "selects_introspection",
]
