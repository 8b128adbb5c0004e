"""
Private marker detection and declaration helpers.

A declaration is private when it carries either the ``is_private`` extension
flag or a ``@private`` directive on its AST node.
"""

import logging
from typing import Any, Optional

from graphql import (
    DirectiveLocation,
    GraphQLDirective,
    GraphQLSchema,
    is_enum_type,
    is_input_object_type,
    is_interface_type,
    is_object_type,
)

logger = logging.getLogger(__name__)

PRIVATE_DIRECTIVE_NAME = "private"
PRIVATE_EXTENSION_KEYS = ("is_private", "isPrivate")

PRIVATE_DIRECTIVE_SDL = (
    "directive @private on SCALAR | OBJECT | FIELD_DEFINITION | ARGUMENT_DEFINITION"
    " | INTERFACE | UNION | ENUM | ENUM_VALUE | INPUT_OBJECT | INPUT_FIELD_DEFINITION"
)

private_directive = GraphQLDirective(
    name=PRIVATE_DIRECTIVE_NAME,
    locations=[
        DirectiveLocation.SCALAR,
        DirectiveLocation.OBJECT,
        DirectiveLocation.FIELD_DEFINITION,
        DirectiveLocation.ARGUMENT_DEFINITION,
        DirectiveLocation.INTERFACE,
        DirectiveLocation.UNION,
        DirectiveLocation.ENUM,
        DirectiveLocation.ENUM_VALUE,
        DirectiveLocation.INPUT_OBJECT,
        DirectiveLocation.INPUT_FIELD_DEFINITION,
    ],
    description="Hides the declaration from introspection and rejects operations using it.",
)


def _has_private_directive(node: Any) -> bool:
    if node is None:
        return False
    for directive in getattr(node, "directives", None) or ():
        if directive.name.value == PRIVATE_DIRECTIVE_NAME:
            return True
    return False


def is_marked_private(declaration: Any) -> bool:
    """
    Check whether a type, field, argument or enum value is marked private.

    Args:
        declaration: Any graphql-core type system object

    Returns:
        True if the extension flag or the ``@private`` directive is present
    """
    extensions = getattr(declaration, "extensions", None) or {}
    if any(extensions.get(key) for key in PRIVATE_EXTENSION_KEYS):
        return True

    if _has_private_directive(getattr(declaration, "ast_node", None)):
        return True

    extension_nodes = getattr(declaration, "extension_ast_nodes", None) or ()
    return any(_has_private_directive(node) for node in extension_nodes)


def _flag(declaration: Any) -> None:
    extensions = dict(getattr(declaration, "extensions", None) or {})
    extensions["is_private"] = True
    declaration.extensions = extensions


def _resolve_coordinate(schema: GraphQLSchema, coordinate: str) -> Any:
    type_name, _, member = coordinate.partition(".")
    named_type = schema.get_type(type_name)
    if named_type is None:
        raise ValueError(f"Unknown type '{type_name}' in coordinate '{coordinate}'")
    if not member:
        return named_type

    arg_name: Optional[str] = None
    if member.endswith(":)") and "(" in member:
        member, _, arg_part = member.partition("(")
        arg_name = arg_part[:-2]

    if is_enum_type(named_type) and arg_name is None:
        value = named_type.values.get(member)
        if value is None:
            raise ValueError(f"Unknown enum value '{coordinate}'")
        return value

    if not (
        is_object_type(named_type)
        or is_interface_type(named_type)
        or is_input_object_type(named_type)
    ):
        raise ValueError(f"Type '{type_name}' has no fields")

    field = named_type.fields.get(member)
    if field is None:
        raise ValueError(f"Unknown field '{type_name}.{member}'")
    if arg_name is None:
        return field

    argument = (getattr(field, "args", None) or {}).get(arg_name)
    if argument is None:
        raise ValueError(f"Unknown argument '{coordinate}'")
    return argument


def mark_private(schema: Any, *coordinates: str) -> None:
    """
    Flag declarations as private by schema coordinate.

    Code-first graphene schemas have no SDL to carry ``@private``, so the
    extension flag is set directly on the built graphql-core objects.
    Coordinates follow the ``Type``, ``Type.field``, ``Type.field(arg:)``
    and ``Enum.VALUE`` forms.
    """
    graphql_schema = getattr(schema, "graphql_schema", schema)
    for coordinate in coordinates:
        _flag(_resolve_coordinate(graphql_schema, coordinate))
        logger.debug("Marked %s as private", coordinate)
