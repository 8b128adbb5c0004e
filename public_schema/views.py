"""
GraphQL view enforcing schema visibility.
"""

import logging
from functools import partial

from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt

try:
    from graphene_django.views import GraphQLView
except ImportError:
    raise ImportError(
        "graphene-django is required for GraphQL views. "
        "Install it with: pip install graphene-django"
    )

from graphql import specified_rules

from .plugins import PublicSchemaPlugin, get_public_schema_plugin

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class PublicSchemaGraphQLView(GraphQLView):
    """
    GraphQL view hiding private declarations of its schema.

    This view extends the standard GraphQLView to:
    - Rescan the schema when the served schema object changes
    - Add the private-access rule to the standard validation rules
    - Redact introspection results before they reach the client

    Usage::

        path("graphql/", PublicSchemaGraphQLView.as_view(schema=schema))
    """

    plugin = None

    def __init__(self, plugin: PublicSchemaPlugin = None, **kwargs):
        super().__init__(**kwargs)
        self.plugin = plugin or self.plugin or get_public_schema_plugin()

    def get_plugin(self) -> PublicSchemaPlugin:
        return self.plugin

    def execute_graphql_request(
        self, request, data, query, variables, operation_name, show_graphiql=False
    ):
        plugin = self.get_plugin()
        if not query or not plugin.is_enabled():
            return super().execute_graphql_request(
                request, data, query, variables, operation_name, show_graphiql
            )

        plugin.sync_schema(self.schema)
        base_rules = self.validation_rules or specified_rules
        self.validation_rules = tuple(base_rules) + tuple(
            plugin.get_validation_rules(self.schema)
        )

        execute = partial(
            super().execute_graphql_request,
            request,
            data,
            query,
            variables,
            operation_name,
            show_graphiql,
        )
        outcome = plugin.on_execute(execute, query, operation_name, schema=self.schema)
        if outcome.handled:
            return outcome.result
        return execute()
