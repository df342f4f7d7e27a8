"""
Basic tests for the forum backend - Minimal smoke tests.
"""

import pytest


@pytest.mark.unit
class TestDjangoConfiguration:
    """Test that Django is configured correctly."""

    def test_django_is_configured(self):
        """Test that Django settings can be loaded."""
        from django.conf import settings

        assert settings.DJANGO_ENV is not None
        assert settings.AUTH_USER_MODEL == "forum.User"

    def test_installed_apps(self):
        """Test that required apps are installed."""
        from django.conf import settings

        required_apps = ["django.contrib.auth", "rest_framework", "channels", "forum"]
        for app in required_apps:
            assert app in settings.INSTALLED_APPS

    def test_forum_settings(self):
        """Test that moderators and the events group are configured."""
        from django.conf import settings

        assert settings.MODERATOR_USERNAMES == ["mod1"]
        assert settings.FORUM_EVENTS_GROUP == "forum"
        assert "forum.exceptions.custom_exception_handler" == (
            settings.REST_FRAMEWORK["EXCEPTION_HANDLER"]
        )


@pytest.mark.unit
class TestSettingsComponents:
    """Test the settings factories."""

    def test_forum_settings_from_environment(self, monkeypatch):
        from configuration.settings.components import get_forum_settings

        monkeypatch.setenv("MODERATOR_USERNAMES", "alice, bob")
        monkeypatch.setenv("CASCADE_RETRY_LIMIT", "7")

        forum_settings = get_forum_settings()

        assert forum_settings["MODERATOR_USERNAMES"] == ["alice", "bob"]
        assert forum_settings["CASCADE_RETRY_LIMIT"] == 7

    def test_celery_beat_schedules_cascade_retry(self):
        from configuration.settings.components import get_celery_settings

        celery_settings = get_celery_settings("redis://localhost:6379/0")
        entry = celery_settings["CELERY_BEAT_SCHEDULE"]["retry-incomplete-cascades"]
        assert entry["task"] == "forum.tasks.tasks.retry_incomplete_cascades_task"
