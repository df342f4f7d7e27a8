# forumutils/log_helpers.py
"""
Helper functions for common logging scenarios.

This module provides utility functions for logging recurring forum events:
API requests, moderator actions, propagation tasks and websocket sessions.

Usage:
    from forumutils.log_helpers import log_moderation_event

    log_moderation_event("user_banned", "mod1", target="user123")
"""

import time
from collections.abc import Callable
from functools import wraps
from typing import Any

from django.http import HttpRequest, HttpResponse

from .logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# API REQUEST LOGGING
# =============================================================================


def log_api_request(
    request: HttpRequest,
    response: HttpResponse | None = None,
    duration: float | None = None,
    error: Exception | None = None,
    **extra_context: Any,
) -> None:
    """
    Log an API request with context.

    Args:
        request: The Django HTTP request
        response: Optional HTTP response
        duration: Request duration in seconds
        error: Optional exception if request failed
        **extra_context: Additional context to log
    """
    context = {
        "request_method": request.method,
        "request_path": request.path,
        "request_ip": get_client_ip(request),
    }

    if response is not None:
        context["response_status"] = response.status_code

    if duration is not None:
        context["duration_seconds"] = round(duration, 4)

    if error:
        context["error_type"] = type(error).__name__
        context["error_message"] = str(error)

    context.update(extra_context)

    log_level = "error" if error else "info"
    getattr(logger, log_level)("api_request", **context)


def get_client_ip(request: HttpRequest) -> str:
    """Get the client IP address from request headers."""
    x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if x_forwarded_for:
        return x_forwarded_for.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "")


# =============================================================================
# MODERATION LOGGING
# =============================================================================


def log_moderation_event(
    action: str,
    moderator: str,
    target: str | None = None,
    **extra_context: Any,
) -> None:
    """
    Log a moderator action for the audit stream.

    Args:
        action: What happened (flag_reviewed, user_banned, post_deleted, ...)
        moderator: Username of the acting moderator
        target: Username affected, if any
        **extra_context: Additional context such as flag_id or post_id

    Example:
        log_moderation_event("post_deleted", "mod1", post_id=12, post_type="question")
    """
    context = {
        "moderation_action": action,
        "moderator": moderator,
    }

    if target:
        context["target_user"] = target

    context.update(extra_context)

    logger.info("moderation_event", **context)


# =============================================================================
# DECORATORS
# =============================================================================


def log_api_view(func: Callable) -> Callable:
    """
    Decorator for API view methods to log requests automatically.

    Example:
        class BanUserAPI(APIView):
            @log_api_view
            def post(self, request):
                ...
    """

    @wraps(func)
    def wrapper(self, request, *args, **kwargs):
        view_logger = get_logger(f"{func.__module__}.{self.__class__.__name__}")
        start_time = time.time()

        try:
            response = func(self, request, *args, **kwargs)
        except Exception as e:
            view_logger.warning(
                "api_view_failed",
                view_method=func.__name__.upper(),
                exception_type=type(e).__name__,
                exception_message=str(e),
                duration_seconds=round(time.time() - start_time, 4),
            )
            raise

        view_logger.info(
            "api_view_completed",
            view_method=func.__name__.upper(),
            status_code=response.status_code,
            duration_seconds=round(time.time() - start_time, 4),
        )
        return response

    return wrapper


# =============================================================================
# CONTEXT MANAGERS
# =============================================================================


class LogContext:
    """Context manager for adding temporary logging context."""

    def __init__(self, **context: Any):
        """
        Initialize the log context.

        Args:
            **context: Key-value pairs to add to logging context
        """
        self.context = context

    def __enter__(self):
        from structlog.contextvars import bind_contextvars

        bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        from structlog.contextvars import unbind_contextvars

        unbind_contextvars(*self.context.keys())


# =============================================================================
# TASK LOGGING
# =============================================================================


def log_task(
    task_name: str,
    status: str,
    result: Any = None,
    error: Exception | None = None,
    duration: float | None = None,
    **extra_context: Any,
) -> None:
    """
    Log a Celery task execution.

    Args:
        task_name: Name of the task
        status: Task status (started, success, failure, retry)
        result: Task result if successful
        error: Exception if failed
        duration: Task duration in seconds
        **extra_context: Additional context
    """
    context = {
        "task_name": task_name,
        "task_status": status,
    }

    if result is not None:
        context["task_result"] = str(result)[:500]

    if error:
        context["exception_type"] = type(error).__name__
        context["exception_message"] = str(error)

    if duration is not None:
        context["duration_seconds"] = round(duration, 2)

    context.update(extra_context)

    log_level = "error" if status == "failure" else "info"
    getattr(logger, log_level)("celery_task", **context)


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "LogContext",
    "get_client_ip",
    "log_api_request",
    "log_api_view",
    "log_moderation_event",
    "log_task",
]
