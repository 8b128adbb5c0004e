"""
Base plugin architecture for GraphQL views.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from graphql import ExecutionResult, ValidationRule


@dataclass
class ExecutionHookResult:
    handled: bool = False
    result: Any = None


class BasePlugin(ABC):
    """
    Base class for plugins hosted by a GraphQL view.

    Plugins can extend the request pipeline by:
    - Reacting to schema changes
    - Intercepting execution and replacing its result
    - Contributing validation rules
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the plugin.

        Args:
            config: Plugin configuration dictionary
        """
        self.config = config or {}
        self.enabled = self.config.get("enabled", True)
        self.name = self.__class__.__name__

    @abstractmethod
    def get_name(self) -> str:
        """Return the plugin name."""
        return self.name

    def get_version(self) -> str:
        """Return the plugin version."""
        return getattr(self, "VERSION", "1.0.0")

    def is_enabled(self) -> bool:
        """Check if plugin is enabled."""
        return self.enabled

    def on_schema_change(self, schema: Any) -> None:
        """
        Hook called when the served schema is built or replaced.

        Args:
            schema: The new ``graphene.Schema`` or ``GraphQLSchema``
        """
        pass

    def on_execute(
        self,
        execute_fn: Callable[[], ExecutionResult],
        query: Optional[str],
        operation_name: Optional[str] = None,
        schema: Any = None,
    ) -> ExecutionHookResult:
        """
        Hook called before an operation executes.

        Returning a handled result stops execution and sends that result
        to the client instead.

        Args:
            execute_fn: Runs the real execution and returns its result
            query: Raw operation text
            operation_name: Requested operation name
            schema: Schema the operation runs against
        """
        return ExecutionHookResult()

    def get_validation_rules(self, schema: Any = None) -> List[Type[ValidationRule]]:
        """Return extra validation rules to run on operations against ``schema``."""
        return []
