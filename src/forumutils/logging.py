# forumutils/logging.py
"""
Structured logging configuration using structlog.

This module provides:
- Structured JSON logging for production
- Colored console logging for development
- Request context binding (request id, acting username)
- Celery task logging support

Usage:
    from forumutils.logging import get_logger

    logger = get_logger(__name__)
    logger.info("flag_submitted", flag_id=12, flagged_by="user123")
"""

import logging
import logging.config
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path

import structlog
from django.conf import settings
from structlog.types import Processor

# =============================================================================
# CONFIGURATION
# =============================================================================

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Request fields that name the acting user on forum endpoints
ACTING_USER_PARAMS = ("moderatorUsername", "username", "flaggedBy", "viewer")


def is_development() -> bool:
    """Check if running in development mode."""
    return getattr(settings, "DEBUG", False)


def get_log_level() -> int:
    """Get the configured log level."""
    level_name = getattr(settings, "LOG_LEVEL", "INFO").upper()
    return LOG_LEVELS.get(level_name, logging.INFO)


def get_logs_dir() -> Path:
    """Get the logs directory path."""
    logs_dir = Path(settings.BASE_DIR) / "logs"
    logs_dir.mkdir(exist_ok=True)
    return logs_dir


# =============================================================================
# PROCESSORS
# =============================================================================


def add_environment(logger: structlog.PrintLogger, name: str, event_dict: dict) -> dict:
    """Add environment information to the event dict."""
    event_dict["environment"] = getattr(settings, "ENVIRONMENT", "unknown")
    return event_dict


def add_app_name(logger: structlog.PrintLogger, name: str, event_dict: dict) -> dict:
    """Add application name to the event dict."""
    event_dict["app"] = "forum"
    return event_dict


def rename_message_field(
    logger: structlog.PrintLogger, name: str, event_dict: dict
) -> dict:
    """Rename 'event' field to 'message' for compatibility."""
    event_dict["message"] = event_dict.pop("event")
    return event_dict


class UTCFormatter:
    """Format timestamps in UTC."""

    def __call__(
        self, logger: structlog.PrintLogger, name: str, event_dict: dict
    ) -> dict:
        event_dict["timestamp"] = (
            datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
        )
        return event_dict


def filter_exc_info(logger: structlog.PrintLogger, name: str, event_dict: dict) -> dict:
    """Filter exception info from regular logs (only show in error logs)."""
    if event_dict.get("level") not in ("error", "critical"):
        event_dict.pop("exc_info", None)
        event_dict.pop("exception", None)
    return event_dict


def order_keys(logger: structlog.PrintLogger, name: str, event_dict: dict) -> dict:
    """Order keys for better readability."""
    key_order = ["timestamp", "level", "logger", "message", "environment"]
    ordered = {k: event_dict.pop(k) for k in key_order if k in event_dict}
    ordered.update(event_dict)
    return ordered


# =============================================================================
# PROCESSOR CHAINS
# =============================================================================

SHARED_PROCESSORS: list[Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    add_app_name,
    add_environment,
    UTCFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]

DEV_PROCESSORS: list[Processor] = [
    *SHARED_PROCESSORS,
    rename_message_field,
    structlog.dev.ConsoleRenderer(
        colors=True, exception_formatter=structlog.dev.plain_traceback
    ),
]

PROD_PROCESSORS: list[Processor] = [
    *SHARED_PROCESSORS,
    rename_message_field,
    filter_exc_info,
    order_keys,
    structlog.processors.JSONRenderer(),
]


# =============================================================================
# DJANGO STANDARD LIBRARY LOGGING CONFIGURATION
# =============================================================================


def get_standard_logging_config() -> dict:
    """
    Get the dictConfig used for Django, Celery and forum loggers.

    File output goes through python-json-logger outside development.
    """
    logs_dir = get_logs_dir()
    log_level = get_log_level()

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "verbose": {
                "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "level": log_level,
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
            },
            "file": {
                "level": "DEBUG",
                "class": "logging.handlers.RotatingFileHandler",
                "filename": logs_dir / "forum.log",
                "maxBytes": 1024 * 1024 * 10,  # 10 MB
                "backupCount": 5,
                "formatter": "json" if not is_development() else "verbose",
            },
            "error_file": {
                "level": "ERROR",
                "class": "logging.handlers.RotatingFileHandler",
                "filename": logs_dir / "forum_error.log",
                "maxBytes": 1024 * 1024 * 10,  # 10 MB
                "backupCount": 10,
                "formatter": "json",
            },
        },
        "loggers": {
            "django": {
                "handlers": ["console", "file"],
                "level": log_level,
                "propagate": False,
            },
            "django.request": {
                "handlers": ["error_file"],
                "level": "ERROR",
                "propagate": False,
            },
            "celery": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False,
            },
            "forum": {
                "handlers": ["console", "file", "error_file"],
                "level": "DEBUG" if is_development() else "INFO",
                "propagate": False,
            },
            "forumutils": {
                "handlers": ["console", "file"],
                "level": "DEBUG" if is_development() else "INFO",
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["console", "file"],
            "level": log_level,
        },
    }


# =============================================================================
# STRUCTLOG CONFIGURATION
# =============================================================================


def configure_structlog() -> None:
    """Configure structlog processors for the current environment."""
    processors = DEV_PROCESSORS if is_development() else PROD_PROCESSORS

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging() -> None:
    """
    Configure both standard Django logging and structlog.

    Called once from ForumConfig.ready().
    """
    logging.config.dictConfig(get_standard_logging_config())
    configure_structlog()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__ of the calling module)
    """
    return structlog.get_logger(name)


# =============================================================================
# DJANGO MIDDLEWARE FOR REQUEST CONTEXT
# =============================================================================


class StructlogMiddleware:
    """
    Binds request context to every log entry written during a request.

    The forum identifies callers by username in query strings and bodies
    rather than by session, so the acting username is taken from the
    query string when present.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        from structlog.contextvars import bind_contextvars, clear_contextvars

        clear_contextvars()

        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        bind_contextvars(
            request_id=request_id,
            request_method=request.method,
            request_path=request.path,
        )

        acting_user = self._get_acting_user(request)
        if acting_user:
            bind_contextvars(acting_user=acting_user)

        request.request_id = request_id

        response = self.get_response(request)

        get_logger("django.request").info(
            "request_completed",
            status_code=response.status_code,
            method=request.method,
            path=request.path,
        )
        return response

    @staticmethod
    def _get_acting_user(request) -> str | None:
        for param in ACTING_USER_PARAMS:
            value = request.GET.get(param)
            if value:
                return value
        return None


# =============================================================================
# CELERY INTEGRATION
# =============================================================================


class CeleryLogger:
    """
    Helper class for logging in Celery tasks with task context.

    Usage:
        from forumutils.logging import CeleryLogger

        @shared_task
        def my_task(arg1):
            logger = CeleryLogger.get_logger(__name__)
            logger.info("task_started", arg1=arg1)
    """

    @staticmethod
    def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
        """Get a logger with Celery task context."""
        from celery import current_task
        from structlog.contextvars import bind_contextvars

        logger = get_logger(name)

        if current_task:
            bind_contextvars(
                task_name=current_task.name,
                task_id=current_task.request.id,
                task_retries=current_task.request.retries,
            )

        return logger


__all__ = [
    "CeleryLogger",
    "StructlogMiddleware",
    "configure_logging",
    "configure_structlog",
    "get_log_level",
    "get_logger",
    "get_logs_dir",
    "get_standard_logging_config",
    "is_development",
]
