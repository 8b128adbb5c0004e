"""
Plugin hiding private declarations from introspection and operations.
"""

import logging
import threading
import weakref
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from graphql import ExecutionResult, GraphQLSchema, ValidationRule

from ..config import get_public_schema_settings, resolve_enabled
from ..redactor import redact_introspection_result, selects_introspection
from ..registry import VisibilityRegistry
from ..rules import create_private_field_rule
from ..scanner import scan_schema
from .base import BasePlugin, ExecutionHookResult

logger = logging.getLogger(__name__)


def _graphql_schema(schema: Any) -> GraphQLSchema:
    return getattr(schema, "graphql_schema", schema)


@dataclass(frozen=True)
class SchemaBinding:
    """Registry of one schema and the validation rule reading it."""

    registry: VisibilityRegistry
    rule: Type[ValidationRule]

    @classmethod
    def for_registry(cls, registry: VisibilityRegistry) -> "SchemaBinding":
        return cls(registry=registry, rule=create_private_field_rule(registry))


class PublicSchemaPlugin(BasePlugin):
    """
    Owns the visibility registries of the schemas it serves.

    Each schema object gets its own registry, rebuilt on every schema change
    and read by the introspection redactor and the validation rule, so
    endpoints serving different schemas never see each other's records.
    A disabled plugin installs nothing: no scan, no rule, no redaction.
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.enabled = resolve_enabled(self.config.get("enabled"))
        self._bindings: "weakref.WeakKeyDictionary[GraphQLSchema, SchemaBinding]" = (
            weakref.WeakKeyDictionary()
        )
        self._bindings_lock = threading.Lock()
        self._current = SchemaBinding.for_registry(VisibilityRegistry())

    @classmethod
    def from_settings(cls) -> "PublicSchemaPlugin":
        return cls(get_public_schema_settings())

    @property
    def registry(self) -> VisibilityRegistry:
        """Registry of the schema changed last."""
        return self._current.registry

    def get_name(self) -> str:
        return "public_schema"

    def _rebuild(self, graphql_schema: GraphQLSchema) -> SchemaBinding:
        # Scan before touching the bindings so a failed scan commits nothing.
        records = scan_schema(graphql_schema)
        with self._bindings_lock:
            binding = self._bindings.get(graphql_schema)
            if binding is None:
                binding = SchemaBinding.for_registry(VisibilityRegistry())
                self._bindings[graphql_schema] = binding
            binding.registry.replace(records)
            self._current = binding
        logger.info(f"Public schema registry rebuilt: {len(records)} private declarations")
        return binding

    def on_schema_change(self, schema: Any) -> None:
        if not self.enabled:
            return
        self._rebuild(_graphql_schema(schema))

    def sync_schema(self, schema: Any) -> Optional[SchemaBinding]:
        """Return the binding of ``schema``, scanning it if it was never seen."""
        if not self.enabled:
            return None

        graphql_schema = _graphql_schema(schema)
        with self._bindings_lock:
            binding = self._bindings.get(graphql_schema)
        if binding is None:
            binding = self._rebuild(graphql_schema)
        return binding

    def _binding(self, schema: Any = None) -> SchemaBinding:
        if schema is None:
            return self._current
        return self.sync_schema(schema) or self._current

    def registry_for(self, schema: Any) -> VisibilityRegistry:
        return self._binding(schema).registry

    def on_execute(
        self,
        execute_fn: Callable[[], ExecutionResult],
        query: Optional[str],
        operation_name: Optional[str] = None,
        schema: Any = None,
    ) -> ExecutionHookResult:
        if not self.enabled or not selects_introspection(query):
            return ExecutionHookResult()

        registry = self._binding(schema).registry
        result = execute_fn()
        if result is None or result.data is None:
            logger.debug("Introspection produced no data, nothing to redact")
            return ExecutionHookResult(handled=True, result=result)

        redact_introspection_result(result.data, registry, query, operation_name)
        return ExecutionHookResult(handled=True, result=result)

    def get_validation_rules(self, schema: Any = None) -> List[Type[ValidationRule]]:
        if not self.enabled:
            return []
        return [self._binding(schema).rule]


_default_plugin: Optional[PublicSchemaPlugin] = None


def get_public_schema_plugin() -> PublicSchemaPlugin:
    """Return the process-wide plugin, built from Django settings on first use."""
    global _default_plugin
    if _default_plugin is None:
        _default_plugin = PublicSchemaPlugin.from_settings()
        state = "enabled" if _default_plugin.is_enabled() else "disabled"
        logger.info(f"Loaded plugin: {_default_plugin.get_name()} v{_default_plugin.get_version()} ({state})")
    return _default_plugin


def reset_public_schema_plugin() -> None:
    """Drop the process-wide plugin so the next lookup rereads settings."""
    global _default_plugin
    _default_plugin = None
