"""
Signals announcing schema changes to the public schema plugin.
"""

import logging

from django.dispatch import Signal

logger = logging.getLogger(__name__)

# Sent with ``schema=`` whenever a schema is built or swapped.
schema_changed = Signal()

_signals_connected = False


def connect_schema_signals() -> None:
    global _signals_connected
    if _signals_connected:
        return

    schema_changed.connect(_schema_changed, dispatch_uid="public_schema.schema_changed")
    _signals_connected = True


def _schema_changed(sender, schema=None, **kwargs) -> None:
    if schema is None:
        logger.debug("schema_changed sent without a schema by %s", sender)
        return

    from .plugins import get_public_schema_plugin

    get_public_schema_plugin().on_schema_change(schema)
