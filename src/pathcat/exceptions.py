"""PathCat custom exception hierarchy.

Provides specific exception types for the failure modes of URL building
and configuration. Every error is raised synchronously; a build either
returns the complete URL or raises before producing any output.

Exception Hierarchy:
    PathCatError (base)
    ├── InvalidTemplateError
    ├── BufferOverflowError
    └── ConfigError
        └── ConfigValidationError
"""

from typing import Optional


class PathCatError(Exception):
    """Base exception for all PathCat errors.

    All PathCat-specific exceptions inherit from this class to allow
    catching every PathCat error with a single except clause.
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        """Initialize PathCat exception.

        Args:
            message: Error message
            context: Optional context dictionary for debugging
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation with context."""
        if self.context:
            context_str = "; ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InvalidTemplateError(PathCatError, ValueError):
    """Raised when the path or URL template is not a well-formed URI reference.

    Attributes:
        template: The rejected template text
    """

    def __init__(
        self,
        message: str,
        template: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        """Initialize template error.

        Args:
            message: Error message
            template: The rejected template
            context: Additional context
        """
        if context is None:
            context = {}
        if template is not None:
            context["template"] = template[:200]
        super().__init__(message, context)
        self.template = template


class BufferOverflowError(PathCatError):
    """Raised when the assembled URL would exceed the working buffer capacity.

    This is a hard ceiling: callers needing longer URLs must configure a
    larger ``buffer_size``.

    Attributes:
        capacity: Buffer capacity in characters
        required: Length the operation would have produced
    """

    def __init__(
        self,
        message: str,
        capacity: Optional[int] = None,
        required: Optional[int] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if capacity is not None:
            context["capacity"] = capacity
        if required is not None:
            context["required"] = required
        super().__init__(message, context)
        self.capacity = capacity
        self.required = required


# Configuration Errors

class ConfigError(PathCatError):
    """Base exception for configuration errors."""

    pass


class ConfigValidationError(ConfigError, ValueError):
    """Raised when a configuration value is invalid.

    Attributes:
        config_key: Configuration key that failed validation
        config_value: The invalid configuration value
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[object] = None,
        context: Optional[dict] = None,
    ):
        """Initialize config validation error.

        Args:
            message: Error message
            config_key: The config key
            config_value: The config value
            context: Additional context
        """
        if context is None:
            context = {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = str(config_value)[:100]
        super().__init__(message, context)
        self.config_key = config_key
        self.config_value = config_value


__all__ = [
    "PathCatError",
    "InvalidTemplateError",
    "BufferOverflowError",
    "ConfigError",
    "ConfigValidationError",
]
