"""Logging configuration and utilities."""

import logging
import secrets
from typing import Any

import structlog


def get_context_logger(name: str) -> structlog.BoundLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog processors and the minimum log level.

    Args:
        level: Minimum level name (e.g. "DEBUG", "INFO")
        json_output: Render JSON lines instead of console output
    """
    level_no = logging.getLevelName(level.upper())
    if not isinstance(level_no, int):
        raise ValueError(f"Unknown log level: {level}")

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_no),
        cache_logger_on_first_use=False,
    )


class BuildLogContext:
    """Context manager binding a per-build ``build_id`` to the logging context.

    Each ``with`` block generates its own id; the bound keys are removed
    again on exit.
    """

    def __init__(self, **context: Any):
        """Initialize with context variables.

        Args:
            **context: Extra key-value pairs bound alongside ``build_id``
        """
        self.build_id = secrets.token_hex(6)
        self.context = {"build_id": self.build_id, **context}

    def __enter__(self) -> "BuildLogContext":
        """Enter context."""
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context."""
        structlog.contextvars.unbind_contextvars(*self.context.keys())


__all__ = [
    "BuildLogContext",
    "configure_logging",
    "get_context_logger",
]
