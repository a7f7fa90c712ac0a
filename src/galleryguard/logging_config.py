"""
Centralized logging configuration for galleryguard.

Sets up structlog on top of the standard library logging backend so that
renderer, detector and orchestrator events share one structured format.
"""

import logging
import os
import sys
from typing import Any

import structlog

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level() -> int:
    """
    Get log level from the LOG_LEVEL environment variable.

    Returns:
        int: Log level constant from logging module, INFO when unset or unknown
    """
    return _LEVELS.get(os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)


def is_development_environment() -> bool:
    """Check if running in development environment."""
    return os.getenv("ENVIRONMENT", "development").lower() in ["development", "dev", "local"]


def configure_structured_logging() -> None:
    """
    Configure structured logging for the whole package.

    Development gets the console renderer, everything else gets JSON lines
    on stderr so the host can ship them to its audit pipeline.
    """
    log_level = get_log_level()
    is_dev = is_development_environment()

    logging.basicConfig(
        level=log_level,
        format="%(message)s",  # structlog does the formatting
        stream=sys.stderr,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger().setLevel(log_level)

    structlog.get_logger("galleryguard.logging").info(
        "logging_configured",
        log_level=logging.getLevelName(log_level),
        environment="development" if is_dev else "production",
    )


def get_logger(name: str | None = None) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (optional, defaults to calling module)

    Returns:
        structlog.BoundLogger: Configured logger instance
    """
    if name is None:
        import inspect

        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__", "unknown")

    return structlog.get_logger(name)


def log_performance(operation: str, duration: float, **context: Any) -> None:
    """
    Log performance metrics.

    Args:
        operation: Name of the operation
        duration: Duration in seconds
        **context: Additional context information
    """
    logger = get_logger("galleryguard.performance")
    logger.info("performance_metric", operation=operation, duration_seconds=duration, **context)


def log_error(error: Exception, context: dict[str, Any] | None = None) -> None:
    """
    Log errors with structured context.

    Args:
        error: Exception that occurred
        context: Additional context information
    """
    logger = get_logger("galleryguard.errors")

    error_context = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if context:
        error_context.update(context)

    logger.error("error_occurred", **error_context, exc_info=error)


def log_security_event(event_type: str, **context: Any) -> None:
    """
    Log security-related events.

    Args:
        event_type: Type of security event
        **context: Additional context information
    """
    logger = get_logger("galleryguard.security")
    logger.warning("security_event", event_type=event_type, **context)


def log_protection_violation(signal: str, **context: Any) -> None:
    """
    Record a detected protection violation in the audit trail.

    Args:
        signal: Name of the signal that triggered the violation
        **context: Gallery/image identifiers supplied by the host
    """
    log_security_event("protection_violation", signal=signal, **context)
