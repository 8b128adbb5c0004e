"""
Testing helpers for public-schema.

Small helpers for building requests and running operations through
``PublicSchemaGraphQLView`` in unit and integration tests.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Mapping, Optional

from django.test import RequestFactory
from django.test.utils import override_settings

from public_schema.plugins import PublicSchemaPlugin, reset_public_schema_plugin


def _header_meta(headers: Optional[Mapping[str, str]]) -> dict[str, str]:
    """Turn ``X-Request-Id`` style names into ``HTTP_X_REQUEST_ID`` META keys."""
    meta: dict[str, str] = {}
    for key, value in (headers or {}).items():
        name = key.replace("-", "_").upper()
        if name != "CONTENT_TYPE" and not name.startswith("HTTP_"):
            name = f"HTTP_{name}"
        meta[name] = value
    return meta


def build_request(
    payload: dict[str, Any],
    *,
    method: str = "POST",
    path: str = "/graphql/",
    headers: Optional[Mapping[str, str]] = None,
):
    """
    Build a GraphQL request for ``payload``.

    GET requests carry the payload as query parameters, with ``variables``
    JSON encoded; POST requests carry it as a JSON body.
    """
    factory = RequestFactory()
    meta = _header_meta(headers)

    if method.upper() == "GET":
        params = dict(payload)
        if isinstance(params.get("variables"), dict):
            params["variables"] = json.dumps(params["variables"])
        return factory.get(path, data=params, **meta)

    return factory.post(
        path,
        data=json.dumps(payload),
        content_type="application/json",
        **meta,
    )


class PublicSchemaTestClient:
    """Sends operations to a ``PublicSchemaGraphQLView`` and decodes the response."""

    def __init__(self, schema: Any, *, plugin: Optional[PublicSchemaPlugin] = None):
        self.schema = schema
        self.plugin = plugin

    def execute(
        self,
        query: str,
        *,
        variables: Optional[dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        method: str = "POST",
        headers: Optional[Mapping[str, str]] = None,
    ) -> dict[str, Any]:
        from public_schema.views import PublicSchemaGraphQLView

        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables
        if operation_name is not None:
            payload["operationName"] = operation_name

        view_kwargs: dict[str, Any] = {"schema": self.schema}
        if self.plugin is not None:
            view_kwargs["plugin"] = self.plugin
        view = PublicSchemaGraphQLView.as_view(**view_kwargs)

        request = build_request(payload, method=method, headers=headers)
        response = view(request)
        return json.loads(response.content.decode("utf-8"))


@contextmanager
def override_public_schema_settings(**kwargs):
    """
    Override ``PUBLIC_SCHEMA`` and rebuild the process-wide plugin from it.
    """
    reset_public_schema_plugin()
    with override_settings(PUBLIC_SCHEMA=kwargs):
        try:
            yield
        finally:
            reset_public_schema_plugin()
