"""
Schema scanner building the visibility registry records.
"""

import logging
from typing import Any, List

from graphql import (
    GraphQLNamedType,
    is_enum_type,
    is_input_object_type,
    is_interface_type,
    is_object_type,
    is_scalar_type,
    is_union_type,
)

from .markers import is_marked_private
from .registry import TOP_LEVEL_OWNER, PrivateFieldRecord

logger = logging.getLogger(__name__)


class SchemaScanner:
    """
    Walk a schema's type map and collect every private declaration.

    Whole types are recorded under ``TOP_LEVEL_OWNER``; fields and input
    fields under their type; enum values under their enum; arguments under
    the name of the field that declares them.
    """

    def __init__(self, schema: Any):
        self.schema = getattr(schema, "graphql_schema", schema)
        self.records: List[PrivateFieldRecord] = []

    def scan(self) -> List[PrivateFieldRecord]:
        self.records = []
        for type_name, named_type in self.schema.type_map.items():
            if type_name.startswith("__"):
                continue
            self._scan_type(named_type)
        return self.records

    def _register(self, declaration: Any, owner: str, name: str) -> None:
        if is_marked_private(declaration):
            self.records.append(PrivateFieldRecord(type_name=owner, field_name=name))

    def _scan_type(self, named_type: GraphQLNamedType) -> None:
        if is_scalar_type(named_type) or is_union_type(named_type):
            self._register(named_type, TOP_LEVEL_OWNER, named_type.name)
        elif is_enum_type(named_type):
            self._register(named_type, TOP_LEVEL_OWNER, named_type.name)
            for value_name, value in named_type.values.items():
                self._register(value, named_type.name, value_name)
        elif (
            is_interface_type(named_type)
            or is_object_type(named_type)
            or is_input_object_type(named_type)
        ):
            self._register(named_type, TOP_LEVEL_OWNER, named_type.name)
            for field_name, field in named_type.fields.items():
                self._register(field, named_type.name, field_name)
                for arg_name, argument in (getattr(field, "args", None) or {}).items():
                    self._register(argument, field_name, arg_name)
        else:
            raise TypeError(
                f"Unexpected type kind for '{named_type.name}': {type(named_type).__name__}"
            )


def scan_schema(schema: Any) -> List[PrivateFieldRecord]:
    """
    Collect the private records of a graphene or graphql-core schema.

    Args:
        schema: ``graphene.Schema`` or ``graphql.GraphQLSchema``

    Returns:
        List of records in type map order
    """
    records = SchemaScanner(schema).scan()
    logger.debug("Scanned schema: %s private declarations", len(records))
    return records
