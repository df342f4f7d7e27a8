# settings/test.py
"""
Test settings for the forum backend.

These settings are used when DJANGO_ENV=test or DJANGO_ENV=testing.
Focus is on speed and isolation from external services.
"""

from .base import *
from .components import get_cors_settings, get_security_settings

# =============================================================================
# ENVIRONMENT
# =============================================================================

ENVIRONMENT = "test"
DEBUG = True
TEST = True
USE_STRUCTURED_LOGGING = False

# =============================================================================
# DATABASE - In-memory SQLite for speed
# =============================================================================

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# =============================================================================
# CACHE - Local memory cache
# =============================================================================

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "test-cache",
    }
}

# =============================================================================
# CELERY - Run tasks synchronously
# =============================================================================

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

# =============================================================================
# CORS - Permissive
# =============================================================================

cors_settings = get_cors_settings(debug=True)
for key, value in cors_settings.items():
    locals()[key] = value

# =============================================================================
# SECURITY - Relaxed for tests
# =============================================================================

security_settings = get_security_settings(debug=True)
for key, value in security_settings.items():
    locals()[key] = value

ALLOWED_HOSTS = ["*"]

# =============================================================================
# PASSWORD VALIDATORS - Disabled for speed
# =============================================================================

AUTH_PASSWORD_VALIDATORS = []

# =============================================================================
# REST FRAMEWORK - No throttling
# =============================================================================

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": [],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
}

# =============================================================================
# FORUM - Fixed moderators, no external profanity API
# =============================================================================

MODERATOR_USERNAMES = ["mod1"]
FORUM_EVENTS_GROUP = "forum"
PROFANITY_API_URL = ""
PROFANITY_API_KEY = ""
BANNED_WORDS = ["darn", "heck"]
CASCADE_RETRY_LIMIT = 3


# =============================================================================
# CHANNEL LAYERS - In-memory
# =============================================================================

CHANNEL_LAYERS = {
    "default": {
        "BACKEND": "channels.layers.InMemoryChannelLayer",
    },
}

# =============================================================================
# TEST OPTIMIZATIONS
# =============================================================================

# Use faster password hasher for tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Empty internal IPs
INTERNAL_IPS = []
