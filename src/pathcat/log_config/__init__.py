"""Logging configuration package."""

from .main import (
    BuildLogContext,
    configure_logging,
    get_context_logger,
)


__all__ = [
    "BuildLogContext",
    "configure_logging",
    "get_context_logger",
]
