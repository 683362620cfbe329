"""Logging and observability configuration using Pydantic Logfire.

All modules should use Python's standard logging library (logging.getLogger(__name__)),
and Logfire will automatically capture and enrich these logs.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Message", extra={"key": "value"})

Structured logging utilities:
    log_with_household_context(logger, "info", "Streaks recomputed", household_id="h1", pets=3)
"""

import logging

import logfire

from pawplan import __version__
from pawplan.core.config import settings


def configure_logfire() -> None:
    """Configure Pydantic Logfire with token from environment."""
    logfire.configure(
        token=settings.logfire_token,
        service_name="pawplan",
        service_version=__version__,
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def span(name: str) -> logfire.LogfireSpan:
    """Create a custom span for service layer functions.

    Usage:
        with span("tracker_service.get_streaks"):
            # Your service logic here
            pass
    """
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Additional context fields (household_id, task_id, pet_id, etc.)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)


def log_with_household_context(
    logger: logging.Logger,
    level: str,
    message: str,
    household_id: str | None = None,
    **extra: object,
) -> None:
    """Log a message with household context.

    Usage:
        log_with_household_context(logger, "info", "Task completed", household_id="h1", task_id="t1")
    """
    context = {"household_id": household_id, **extra} if household_id else extra
    log_with_context(logger, level, message, **context)
