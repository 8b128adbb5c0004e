"""
Introspection redaction.

The introspection result is walked alongside the operation AST so that
aliases, fragments and nested ``__Type`` selections are all covered. Every
type descriptor found on the way has its private members removed.
"""

import logging
from typing import Any, Dict, FrozenSet, List, Optional, Set, Union

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLError,
    GraphQLObjectType,
    InlineFragmentNode,
    OperationDefinitionNode,
    SelectionSetNode,
    StringValueNode,
    get_named_type,
    get_operation_ast,
    introspection_types,
    parse,
)

from .registry import VisibilityRegistry

logger = logging.getLogger(__name__)

INTROSPECTION_ROOT_FIELDS = {
    "__schema": "__Schema",
    "__type": "__Type",
}

MEMBER_LIST_FIELDS = ("fields", "inputFields", "enumValues")

_TYPE_DESCRIPTOR = introspection_types["__Type"]


def _parse(query: Union[str, DocumentNode, None]) -> Optional[DocumentNode]:
    if isinstance(query, DocumentNode):
        return query
    if not query:
        return None
    try:
        return parse(query)
    except (GraphQLError, TypeError):
        return None


def _response_key(node: FieldNode) -> str:
    return node.alias.value if node.alias else node.name.value


def _fragments(document: DocumentNode) -> Dict[str, FragmentDefinitionNode]:
    return {
        definition.name.value: definition
        for definition in document.definitions
        if isinstance(definition, FragmentDefinitionNode)
    }


def _literal_type_name(node: FieldNode) -> Optional[str]:
    """Type name passed as a string literal to ``__type(name:)``."""
    if node.name.value != "__type":
        return None
    for argument in node.arguments or ():
        if argument.name.value == "name" and isinstance(argument.value, StringValueNode):
            return argument.value.value
    return None


def collect_fields(
    selection_set: Optional[SelectionSetNode],
    fragments: Dict[str, FragmentDefinitionNode],
    visited: Optional[Set[str]] = None,
) -> List[FieldNode]:
    """Flatten a selection set into its field nodes, expanding fragments."""
    if selection_set is None:
        return []
    visited = set() if visited is None else visited
    fields: List[FieldNode] = []
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            fields.append(selection)
        elif isinstance(selection, InlineFragmentNode):
            fields.extend(collect_fields(selection.selection_set, fragments, visited))
        elif isinstance(selection, FragmentSpreadNode):
            name = selection.name.value
            fragment = fragments.get(name)
            if fragment is None or name in visited:
                continue
            visited.add(name)
            fields.extend(collect_fields(fragment.selection_set, fragments, visited))
    return fields


def selects_introspection(query: Union[str, DocumentNode, None]) -> bool:
    """
    Check whether an operation selects ``__schema`` or ``__type`` at its root.

    Unparseable text is not introspection; the engine reports the syntax
    error itself.
    """
    document = _parse(query)
    if document is None:
        return False

    fragments = _fragments(document)
    for definition in document.definitions:
        if not isinstance(definition, OperationDefinitionNode):
            continue
        for node in collect_fields(definition.selection_set, fragments):
            if node.name.value in INTROSPECTION_ROOT_FIELDS:
                return True
    return False


class IntrospectionRedactor:
    """Strips registered private members from an introspection result."""

    def __init__(
        self,
        registry: VisibilityRegistry,
        document: DocumentNode,
        operation_name: Optional[str] = None,
    ):
        self.registry = registry
        self.operation = get_operation_ast(document, operation_name)
        self.fragments = _fragments(document)

    def redact(self, data: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not data or self.operation is None:
            return data

        for node in collect_fields(self.operation.selection_set, self.fragments):
            type_name = INTROSPECTION_ROOT_FIELDS.get(node.name.value)
            if type_name is None:
                continue
            self._walk(
                data.get(_response_key(node)),
                introspection_types[type_name],
                node,
                owner=_literal_type_name(node),
            )
        return data

    def _walk(
        self,
        value: Any,
        value_type: GraphQLObjectType,
        node: FieldNode,
        owner: Optional[str] = None,
    ) -> None:
        if value is None or node.selection_set is None:
            return
        if isinstance(value, list):
            for item in value:
                self._walk(item, value_type, node, owner)
            return
        if not isinstance(value, dict):
            return

        children = collect_fields(node.selection_set, self.fragments)
        if value_type is _TYPE_DESCRIPTOR:
            self._redact_descriptor(value, children, owner)

        for child in children:
            field_def = value_type.fields.get(child.name.value)
            if field_def is None:
                continue
            self._walk(value.get(_response_key(child)), get_named_type(field_def.type), child)

    @staticmethod
    def _selected_value(value: Dict[str, Any], children: List[FieldNode], field_name: str) -> Any:
        for child in children:
            if child.name.value != field_name:
                continue
            selected = value.get(_response_key(child))
            if selected is not None:
                return selected
        return None

    def _hidden_members(self, owner: Optional[str]) -> FrozenSet[str]:
        if owner is None:
            # Unknown owner: filter against every private member name.
            return self.registry.private_member_names()
        return self.registry.private_fields(owner)

    def _redact_descriptor(
        self,
        descriptor: Dict[str, Any],
        children: List[FieldNode],
        known_owner: Optional[str] = None,
    ) -> None:
        owner = self._selected_value(descriptor, children, "name") or known_owner
        hidden = self._hidden_members(owner)
        if not hidden:
            return

        for child in children:
            if child.name.value not in MEMBER_LIST_FIELDS:
                continue
            key = _response_key(child)
            members = descriptor.get(key)
            if not isinstance(members, list):
                continue
            member_children = collect_fields(child.selection_set, self.fragments)
            kept = []
            for member in members:
                if not isinstance(member, dict):
                    kept.append(member)
                    continue
                name = self._selected_value(member, member_children, "name")
                # A member without a selected name cannot be told apart, drop it.
                if name is not None and name not in hidden:
                    kept.append(member)
            descriptor[key] = kept
            logger.debug(
                "Redacted %s private entries from %s.%s",
                len(members) - len(kept),
                owner,
                key,
            )


def redact_introspection_result(
    data: Optional[Dict[str, Any]],
    registry: VisibilityRegistry,
    document: Union[str, DocumentNode],
    operation_name: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    Remove private members from every type descriptor in ``data``.

    Descriptors keep their position in ``__schema.types``; whole private
    types are not removed. Redacting an already redacted result is a no-op.

    Args:
        data: ``ExecutionResult.data`` of an introspection operation
        registry: Registry of the schema the operation ran against
        document: Operation text or parsed document
        operation_name: Operation to use when the document holds several

    Returns:
        The same ``data`` mapping, modified in place
    """
    parsed = _parse(document)
    if parsed is None:
        return data
    return IntrospectionRedactor(registry, parsed, operation_name).redact(data)
