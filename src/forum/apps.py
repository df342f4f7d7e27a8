# forum/apps.py
"""
Django app configuration for the forum application.

This module initializes the application and configures structured logging.
"""

from django.apps import AppConfig


class ForumConfig(AppConfig):
    """Configuration for the forum Django application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "forum"
    verbose_name = "Forum Moderation"

    def ready(self) -> None:
        """Configure structured logging once Django has loaded settings."""
        from django.conf import settings

        if getattr(settings, "USE_STRUCTURED_LOGGING", True):
            from forumutils.logging import configure_logging

            configure_logging()
