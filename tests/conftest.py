import pytest
from graphql import build_schema

from public_schema import PRIVATE_DIRECTIVE_SDL

ACCOUNTS_SDL = (
    PRIVATE_DIRECTIVE_SDL
    + """
scalar Secret @private

enum Role {
  ADMIN
  USER
  INTERNAL @private
}

enum Legacy @private {
  OLD
}

interface Node {
  id: ID!
}

interface Account {
  id: ID!
  internalScore: Int @private
}

type User implements Node & Account {
  id: ID!
  name: String
  ssn: String @private
  internalScore: Int
  posts(first: Int, includeHidden: Boolean @private): [Post]
}

type Post implements Node {
  id: ID!
  title: String
  draftNotes: String @private
}

type AuditLog @private {
  id: ID!
}

union SearchResult = User | Post

union Hidden @private = User | Post

input UserFilter {
  name: String
  role: Role
  internalOnly: Boolean @private
  nested: UserFilter
}

type Query {
  user(id: ID!): User
  users(filter: UserFilter, filters: [UserFilter!]): [User]
  search(term: String): [SearchResult]
  node(id: ID!): Node
  account: Account
  auditLog: AuditLog
  secret: Secret
  hidden: Hidden
  legacy: Legacy
  roles(role: Role): [Role]
}
"""
)


@pytest.fixture
def accounts_schema():
    """SDL schema covering every declaration site that can carry @private."""
    return build_schema(ACCOUNTS_SDL)
