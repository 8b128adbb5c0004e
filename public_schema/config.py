"""
Configuration for the public schema plugin.

Settings are read from the ``PUBLIC_SCHEMA`` Django setting and merged over
library defaults::

    PUBLIC_SCHEMA = {
        "enabled": "{env.PUBLIC_SCHEMA_ENABLED}",
    }

String values of ``enabled`` may contain ``{env.NAME}`` placeholders, which
are resolved against the process environment when the plugin is built.
"""

import logging
import os
import re
from typing import Any, Dict, Mapping, Optional

from django.conf import settings

logger = logging.getLogger(__name__)

SETTINGS_NAME = "PUBLIC_SCHEMA"

LIBRARY_DEFAULTS: Dict[str, Any] = {
    "enabled": False,
}

_ENV_PLACEHOLDER = re.compile(r"\{\s*env\.([A-Za-z_][A-Za-z0-9_]*)\s*\}")


def interpolate(template: str, env: Optional[Mapping[str, str]] = None) -> str:
    """Replace ``{env.NAME}`` placeholders; unset variables become empty strings."""
    env = os.environ if env is None else env
    return _ENV_PLACEHOLDER.sub(lambda match: env.get(match.group(1), ""), template)


def resolve_enabled(value: Any, env: Optional[Mapping[str, str]] = None) -> bool:
    """
    Resolve the ``enabled`` flag.

    Booleans are used as is; strings enable the plugin only when they
    interpolate to exactly ``"true"``. Anything else disables it.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        return interpolate(value, env) == "true"

    logger.warning(
        f"Unsupported value for {SETTINGS_NAME}['enabled']: {value!r}; plugin disabled"
    )
    return False


def get_public_schema_settings() -> Dict[str, Any]:
    """Return the configured settings merged over the library defaults."""
    configured = getattr(settings, SETTINGS_NAME, None) or {}
    if not isinstance(configured, Mapping):
        logger.warning(f"{SETTINGS_NAME} must be a mapping, got {type(configured).__name__}")
        configured = {}

    merged = dict(LIBRARY_DEFAULTS)
    merged.update(configured)
    return merged
