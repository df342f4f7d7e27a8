# exceptions.py
"""
Domain errors raised by the forum services and their HTTP mapping.

Services raise these; API views let them propagate and
``custom_exception_handler`` turns them into ``{"error": ...}`` responses.
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ForumError(Exception):
    """Base class for errors with a fixed HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ForumError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ProfanityError(ValidationError):
    """Submitted text failed the profanity check."""

    default_message = "Content contains inappropriate language"

    def __init__(self, censored_text: str = "", message: str | None = None):
        self.censored_text = censored_text
        super().__init__(message)


class AuthorizationError(ForumError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "User is not authorized to perform this action"


class UserBannedError(AuthorizationError):
    default_message = "Your account has been banned"


class ShadowBannedError(AuthorizationError):
    default_message = (
        "You are not allowed to post since you did not adhere to community guidelines"
    )


class NotFoundError(ForumError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"
    already_resolved = False


class FlagAlreadyResolvedError(NotFoundError):
    """The flag exists but has already left the pending state."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Flag not found or already resolved"
    already_resolved = True


class PersistenceError(ForumError):
    default_message = "Error when accessing the data store"


class PropagationError(PersistenceError):
    """A cascade step failed after the primary mutation was committed."""

    def __init__(self, step: str, cause: Exception | None = None, run_id=None):
        self.step = step
        self.cause = cause
        self.run_id = run_id
        super().__init__(f"Propagation incomplete at step '{step}': {cause}")


class ProfanityCheckError(ForumError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Failed to validate content for profanity."


def custom_exception_handler(exc, context):
    """
    DRF exception handler that understands forum errors.

    Falls back to the default handler for everything else, so DRF's own
    parse and permission errors keep their usual shape.
    """
    if isinstance(exc, DatabaseError):
        exc = PersistenceError(f"Error when accessing the data store: {exc}")

    if isinstance(exc, ForumError):
        view = context.get("view")
        view_name = view.__class__.__name__ if view else "unknown"
        if exc.status_code >= 500:
            logger.error(f"{view_name} failed: {exc.message}")
        else:
            logger.info(f"{view_name} rejected request: {exc.message}")

        body = {"error": exc.message}
        if isinstance(exc, PropagationError):
            body["step"] = exc.step
        if isinstance(exc, ProfanityError) and exc.censored_text:
            body["censored"] = exc.censored_text
        return Response(body, status=exc.status_code)

    return exception_handler(exc, context)
