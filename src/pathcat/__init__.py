"""
PathCat Package

URL building from path templates and structured parameters.

This package provides:
- build_url: Substitute ``:name`` placeholders and append a query string
- UrlTemplate: Reusable template with base parameters and configuration
- PathCatConfig: Immutable formatting options (booleans, arrays, naming)
- flatten: Turn nested objects into a flat, case-insensitive parameter map

Usage:
    from pathcat import build_url, PathCatConfig, ArrayFormat

    build_url("/users/:id", {"id": 123, "filter": "active"})
    # '/users/123?filter=active'

    build_url(
        "/api",
        {"items": ["a", "b", "c"]},
        PathCatConfig(array_format=ArrayFormat.INDEXED),
    )
    # '/api?items[0]=a&items[1]=b&items[2]=c'
"""

from .buffer import BufferPool, UrlBuffer, get_buffer_pool
from .builder import build_url
from .config import (
    DEFAULT_BUFFER_SIZE,
    ArrayFormat,
    BooleanFormat,
    IntrospectionMode,
    ObjectAccessorFormat,
    PathCatConfig,
    PropertyNameFormat,
)
from .exceptions import (
    BufferOverflowError,
    ConfigError,
    ConfigValidationError,
    InvalidTemplateError,
    PathCatError,
)
from .flattener import flatten
from .formatting import combine_keys, format_boolean, format_property_name, render_value
from .log_config import configure_logging, get_context_logger
from .settings import PathCatSettings, get_default_config, get_settings, reload_settings
from .template import UrlTemplate
from .types import ParameterMap
from .validation import is_well_formed_uri

__version__ = "1.0.0"

__all__ = [
    # Main API
    "build_url",
    "UrlTemplate",
    "flatten",
    # Configuration
    "PathCatConfig",
    "PathCatSettings",
    "ArrayFormat",
    "BooleanFormat",
    "IntrospectionMode",
    "ObjectAccessorFormat",
    "PropertyNameFormat",
    "DEFAULT_BUFFER_SIZE",
    "get_default_config",
    "get_settings",
    "reload_settings",
    # Building blocks
    "ParameterMap",
    "UrlBuffer",
    "BufferPool",
    "get_buffer_pool",
    "combine_keys",
    "format_boolean",
    "format_property_name",
    "render_value",
    "is_well_formed_uri",
    # Logging
    "configure_logging",
    "get_context_logger",
    # Exceptions
    "PathCatError",
    "InvalidTemplateError",
    "BufferOverflowError",
    "ConfigError",
    "ConfigValidationError",
]
