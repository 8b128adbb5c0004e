"""
Django app configuration for public-schema.

This module configures:
- Schema change signal handling
- Early validation of the plugin configuration
"""

import logging

from django.apps import AppConfig as BaseAppConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for public-schema."""

    name = "public_schema"
    verbose_name = "GraphQL Public Schema"
    label = "public_schema"

    def ready(self):
        """Initialize the application after Django has loaded."""
        self._setup_signals()
        self._validate_configuration()

    def _setup_signals(self):
        from .signals import connect_schema_signals

        connect_schema_signals()
        logger.debug("Schema change signals connected")

    def _validate_configuration(self):
        from .config import get_public_schema_settings, resolve_enabled

        config = get_public_schema_settings()
        if not resolve_enabled(config.get("enabled")):
            logger.info("Public schema plugin is disabled")
