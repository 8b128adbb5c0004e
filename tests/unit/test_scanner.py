"""
Unit tests for the schema scanner and private markers.
"""

import graphene
import pytest
from graphql import GraphQLNamedType, build_schema

from public_schema import PRIVATE_DIRECTIVE_SDL, is_marked_private, mark_private
from public_schema.registry import TOP_LEVEL_OWNER, PrivateFieldRecord
from public_schema.scanner import scan_schema

pytestmark = pytest.mark.unit


def _records(*pairs):
    return {PrivateFieldRecord(type_name, field_name) for type_name, field_name in pairs}


def test_scan_records_every_marked_declaration(accounts_schema):
    records = scan_schema(accounts_schema)

    assert set(records) == _records(
        (TOP_LEVEL_OWNER, "Secret"),
        (TOP_LEVEL_OWNER, "Legacy"),
        (TOP_LEVEL_OWNER, "AuditLog"),
        (TOP_LEVEL_OWNER, "Hidden"),
        ("Role", "INTERNAL"),
        ("Account", "internalScore"),
        ("User", "ssn"),
        ("Post", "draftNotes"),
        ("UserFilter", "internalOnly"),
        ("posts", "includeHidden"),
    )


def test_scan_ignores_unmarked_declarations(accounts_schema):
    records = scan_schema(accounts_schema)

    assert PrivateFieldRecord("User", "id") not in records
    assert PrivateFieldRecord("User", "internalScore") not in records
    assert not any(record.field_name.startswith("__") for record in records)


def test_scan_schema_without_markers_is_empty():
    schema = build_schema("type Query { ping: String }")

    assert scan_schema(schema) == []


def test_argument_records_are_owned_by_the_field(accounts_schema):
    records = scan_schema(accounts_schema)

    assert PrivateFieldRecord("posts", "includeHidden") in records
    assert PrivateFieldRecord("User", "includeHidden") not in records


def test_type_extension_directive_marks_the_type():
    schema = build_schema(
        PRIVATE_DIRECTIVE_SDL
        + """
        type Post { id: ID! }
        extend type Post @private
        type Query { post: Post }
        """
    )

    assert is_marked_private(schema.get_type("Post")) is True
    assert PrivateFieldRecord(TOP_LEVEL_OWNER, "Post") in scan_schema(schema)


def test_extension_flag_marks_declaration():
    schema = build_schema("type Query { ping: String, token: String }")
    schema.query_type.fields["token"].extensions = {"isPrivate": True}

    assert scan_schema(schema) == [PrivateFieldRecord("Query", "token")]


def test_mark_private_by_coordinate():
    schema = build_schema(
        """
        enum Color { RED SECRET }
        type Query { paint(color: Color, code: String): String, hue: Color }
        """
    )

    mark_private(schema, "Color.SECRET", "Query.paint(code:)", "Query.hue")

    assert set(scan_schema(schema)) == _records(
        ("Color", "SECRET"),
        ("paint", "code"),
        ("Query", "hue"),
    )


def test_mark_private_rejects_unknown_coordinates():
    schema = build_schema("type Query { ping: String }")

    with pytest.raises(ValueError):
        mark_private(schema, "Missing.field")
    with pytest.raises(ValueError):
        mark_private(schema, "Query.pong")
    with pytest.raises(ValueError):
        mark_private(schema, "Query.ping(nope:)")


def test_scan_accepts_graphene_schema():
    class Profile(graphene.ObjectType):
        handle = graphene.String()
        email = graphene.String()

    class Query(graphene.ObjectType):
        profile = graphene.Field(Profile)

    schema = graphene.Schema(query=Query)
    mark_private(schema, "Profile.email")

    assert scan_schema(schema) == [PrivateFieldRecord("Profile", "email")]


def test_unknown_type_kind_raises_type_error():
    schema = build_schema("type Query { ping: String }")
    schema.type_map["Odd"] = GraphQLNamedType("Odd")

    with pytest.raises(TypeError, match="Odd"):
        scan_schema(schema)
