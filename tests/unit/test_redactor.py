"""
Unit tests for introspection redaction.
"""

import copy

import pytest
from graphql import graphql_sync

from public_schema.redactor import redact_introspection_result, selects_introspection
from public_schema.registry import VisibilityRegistry
from public_schema.scanner import scan_schema

pytestmark = pytest.mark.unit

TYPES_QUERY = """
{
  __schema {
    types {
      name
      fields { name }
      inputFields { name }
      enumValues { name }
    }
  }
}
"""


def _introspect(schema, query):
    result = graphql_sync(schema, query)
    assert result.errors is None
    registry = VisibilityRegistry(scan_schema(schema))
    return result.data, registry


def _names(entries):
    return [entry["name"] for entry in entries or []]


def _type(data, name):
    return next(t for t in data["__schema"]["types"] if t["name"] == name)


def test_private_members_are_removed_from_schema_types(accounts_schema):
    data, registry = _introspect(accounts_schema, TYPES_QUERY)

    redact_introspection_result(data, registry, TYPES_QUERY)

    assert _names(_type(data, "User")["fields"]) == ["id", "name", "internalScore", "posts"]
    assert _names(_type(data, "Post")["fields"]) == ["id", "title"]
    assert "internalScore" not in _names(_type(data, "Account")["fields"])
    assert _names(_type(data, "UserFilter")["inputFields"]) == ["name", "role", "nested"]
    assert _names(_type(data, "Role")["enumValues"]) == ["ADMIN", "USER"]


def test_type_list_keeps_order_and_whole_private_types(accounts_schema):
    data, registry = _introspect(accounts_schema, TYPES_QUERY)
    before = _names(data["__schema"]["types"])

    redact_introspection_result(data, registry, TYPES_QUERY)

    assert _names(data["__schema"]["types"]) == before
    assert "AuditLog" in before
    assert _names(_type(data, "AuditLog")["fields"]) == ["id"]


def test_redaction_is_idempotent(accounts_schema):
    data, registry = _introspect(accounts_schema, TYPES_QUERY)

    once = copy.deepcopy(redact_introspection_result(data, registry, TYPES_QUERY))
    twice = redact_introspection_result(data, registry, TYPES_QUERY)

    assert twice == once


def test_aliases_do_not_bypass_redaction(accounts_schema):
    query = '{ s: __schema { t: types { n: name f: fields { label: name } } } }'
    data, registry = _introspect(accounts_schema, query)

    redact_introspection_result(data, registry, query)

    user = next(t for t in data["s"]["t"] if t["n"] == "User")
    assert [field["label"] for field in user["f"]] == ["id", "name", "internalScore", "posts"]


def test_fragments_do_not_bypass_redaction(accounts_schema):
    query = """
    query Intro { ...Root }
    fragment Root on Query { __schema { types { ...TypeParts } } }
    fragment TypeParts on __Type { name fields { name } }
    """
    data, registry = _introspect(accounts_schema, query)

    redact_introspection_result(data, registry, query, "Intro")

    assert "ssn" not in _names(_type(data, "User")["fields"])


def test_single_type_lookup_is_redacted(accounts_schema):
    query = '{ __type(name: "User") { name fields { name } } }'
    data, registry = _introspect(accounts_schema, query)

    redact_introspection_result(data, registry, query)

    assert _names(data["__type"]["fields"]) == ["id", "name", "internalScore", "posts"]


def test_nested_type_descriptors_are_redacted(accounts_schema):
    query = '{ __type(name: "Query") { name fields { name type { name fields { name } } } } }'
    data, registry = _introspect(accounts_schema, query)

    redact_introspection_result(data, registry, query)

    user_field = next(f for f in data["__type"]["fields"] if f["name"] == "user")
    assert user_field["type"]["name"] == "User"
    assert "ssn" not in _names(user_field["type"]["fields"])


def test_type_lookup_uses_literal_name_when_name_is_not_selected(accounts_schema):
    query = '{ __type(name: "User") { fields { name } } }'
    data, registry = _introspect(accounts_schema, query)

    redact_introspection_result(data, registry, query)

    assert _names(data["__type"]["fields"]) == ["id", "name", "internalScore", "posts"]


def test_descriptor_without_name_is_filtered_against_all_private_names(accounts_schema):
    query = '{ __type(name: "Query") { fields { type { fields { name } } } } }'
    data, registry = _introspect(accounts_schema, query)

    redact_introspection_result(data, registry, query)

    user_type = data["__type"]["fields"][0]["type"]
    assert _names(user_type["fields"]) == ["id", "name", "posts"]


def test_members_without_name_are_dropped_when_owner_has_private_members(accounts_schema):
    query = '{ __type(name: "User") { name fields { description } } }'
    data, registry = _introspect(accounts_schema, query)

    redact_introspection_result(data, registry, query)

    assert data["__type"]["fields"] == []


def test_absent_data_is_returned_untouched(accounts_schema):
    registry = VisibilityRegistry(scan_schema(accounts_schema))

    assert redact_introspection_result(None, registry, TYPES_QUERY) is None


def test_non_introspection_keys_are_untouched(accounts_schema):
    registry = VisibilityRegistry(scan_schema(accounts_schema))
    data = {"user": {"fields": [{"name": "ssn"}]}}

    redact_introspection_result(data, registry, '{ user(id: "1") { id } }')

    assert data == {"user": {"fields": [{"name": "ssn"}]}}


@pytest.mark.parametrize(
    "query",
    [
        "{ __schema { types { name } } }",
        '{ __type(name: "User") { name } }',
        "{ alias: __schema { queryType { name } } }",
        "query { ...F } fragment F on Query { __schema { types { name } } }",
        '{ user(id: "1") { id } __schema { types { name } } }',
    ],
)
def test_selects_introspection(query):
    assert selects_introspection(query) is True


@pytest.mark.parametrize(
    "query",
    [
        '{ user(id: "1") { id } }',
        "{ __typename }",
        "{ user(id: ",
        "",
        None,
    ],
)
def test_does_not_select_introspection(query):
    assert selects_introspection(query) is False
