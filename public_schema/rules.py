"""
Validation rule rejecting operations that reference private declarations.
"""

import logging
from typing import Any, List, Optional, Tuple, Type

from graphql import (
    ArgumentNode,
    EnumValueNode,
    FieldNode,
    GraphQLCompositeType,
    GraphQLError,
    Node,
    ObjectFieldNode,
    ValidationRule,
    VariableDefinitionNode,
    get_named_type,
    is_enum_type,
    is_input_object_type,
    is_interface_type,
    is_introspection_type,
    is_object_type,
    is_union_type,
)
from graphql.validation import ValidationContext

from .registry import TOP_LEVEL_OWNER, VisibilityRegistry

logger = logging.getLogger(__name__)

PRIVATE_FIELD_ERROR_CODE = "PRIVATE_FIELD"


class PrivateFieldValidationRule(ValidationRule):
    """
    Reports one error per selection, input field, argument, variable or enum
    value that the registry marks as private, or whose type is private.

    Interface and union parents are expanded to their concrete object types,
    and object parents are also checked against the interfaces they
    implement, so privacy declared on an interface reaches every implementer.

    Use ``create_private_field_rule`` to bind the rule to a registry; the
    unbound class refuses to run.
    """

    registry: Optional[VisibilityRegistry] = None

    def __init__(self, context: ValidationContext):
        if self.registry is None:
            raise TypeError(
                "PrivateFieldValidationRule has no registry, "
                "build it with create_private_field_rule(registry)"
            )
        super().__init__(context)
        # (field name, exempt) for every field currently entered
        self._fields: List[Tuple[str, bool]] = []

    def _report(self, node: Node, message: str) -> None:
        logger.debug("Rejected operation: %s", message)
        self.report_error(
            GraphQLError(message, node, extensions={"code": PRIVATE_FIELD_ERROR_CODE})
        )

    def _check_type(self, node: Node, type_: Any, location: str) -> None:
        named_type = get_named_type(type_)
        if named_type is not None and self.registry.is_private(
            named_type.name, TOP_LEVEL_OWNER
        ):
            self._report(node, f'Cannot type "{named_type.name}" on {location}.')

    def _owner_names(self, parent_type: GraphQLCompositeType) -> List[str]:
        owners: List[str] = []
        if is_object_type(parent_type):
            objects = [parent_type]
        elif is_union_type(parent_type):
            objects = list(parent_type.types)
        elif is_interface_type(parent_type):
            owners.append(parent_type.name)
            objects = list(self.context.schema.get_implementations(parent_type).objects)
        else:
            objects = []

        for object_type in objects:
            owners.append(object_type.name)
            owners.extend(interface.name for interface in object_type.interfaces)
        return list(dict.fromkeys(owners))

    def _is_exempt(self) -> bool:
        field_type = self.context.get_type()
        if field_type is not None and is_introspection_type(get_named_type(field_type)):
            return True
        parent_type = self.context.get_parent_type()
        return parent_type is None or is_introspection_type(parent_type)

    def enter_field(self, node: FieldNode, *_args):
        field_name = node.name.value
        exempt = self._is_exempt()
        self._fields.append((field_name, exempt))
        if exempt:
            return

        for owner in self._owner_names(self.context.get_parent_type()):
            if self.registry.is_private(field_name, owner):
                self._report(node, f'Cannot field "{field_name}" on type "{owner}".')
        self._check_type(node, self.context.get_type(), f'field "{field_name}"')

    def leave_field(self, _node: FieldNode, *_args):
        self._fields.pop()

    def enter_argument(self, node: ArgumentNode, *_args):
        if not self._fields or self.context.get_directive() is not None:
            return
        argument = self.context.get_argument()
        if argument is None:
            return
        field_name, exempt = self._fields[-1]
        if exempt:
            return

        arg_name = node.name.value
        if self.registry.is_private(arg_name, field_name):
            self._report(node, f'Cannot argument "{arg_name}" on field "{field_name}".')
        self._check_type(node, argument.type, f'argument "{arg_name}"')

    def enter_variable_definition(self, node: VariableDefinitionNode, *_args):
        self._check_type(
            node, self.context.get_input_type(), f'variable "${node.variable.name.value}"'
        )

    def enter_object_field(self, node: ObjectFieldNode, *_args):
        # Covers argument literals and variable default values alike.
        parent_type = self.context.get_parent_input_type()
        if parent_type is None:
            argument = self.context.get_argument()
            parent_type = argument.type if argument is not None else None

        owner_type = get_named_type(parent_type)
        if not is_input_object_type(owner_type):
            return

        field_name = node.name.value
        if self.registry.is_private(field_name, owner_type.name):
            self._report(node, f'Cannot field "{field_name}" on type "{owner_type.name}".')

    def enter_enum_value(self, node: EnumValueNode, *_args):
        enum_type = get_named_type(self.context.get_input_type())
        if not is_enum_type(enum_type):
            return

        if self.registry.is_private(node.value, enum_type.name):
            self._report(node, f'Cannot field "{node.value}" on type "{enum_type.name}".')


def create_private_field_rule(registry: VisibilityRegistry) -> Type[ValidationRule]:
    """
    Bind the validation rule to a registry.

    graphql-core instantiates rules per validated document with only the
    validation context, so the registry travels as a class attribute.
    """
    return type(
        "PrivateFieldValidationRule",
        (PrivateFieldValidationRule,),
        {"registry": registry},
    )
