"""
Plugins for public schema GraphQL views.
"""

from .base import BasePlugin, ExecutionHookResult
from .public_schema import (
    PublicSchemaPlugin,
    SchemaBinding,
    get_public_schema_plugin,
    reset_public_schema_plugin,
)

__all__ = [
    "BasePlugin",
    "ExecutionHookResult",
    "PublicSchemaPlugin",
    "SchemaBinding",
    "get_public_schema_plugin",
    "reset_public_schema_plugin",
]
