"""Value rendering and key naming helpers.

No quoting or percent-encoding is applied here; values are rendered to
their canonical text and written into the URL as-is.
"""

import datetime
import os
from enum import Enum
from typing import Any

from .config import BooleanFormat, ObjectAccessorFormat, PathCatConfig, PropertyNameFormat


_BOOLEAN_TEXT: dict[BooleanFormat, tuple[str, str]] = {
    BooleanFormat.LOWERCASE: ("true", "false"),
    BooleanFormat.NUMERIC: ("1", "0"),
    BooleanFormat.ON_OFF: ("on", "off"),
}


def format_boolean(value: bool, fmt: BooleanFormat = BooleanFormat.DEFAULT) -> str:
    """Render a boolean according to ``fmt``.

    ``BooleanFormat.DEFAULT`` yields Python's canonical ``True``/``False``.
    """
    texts = _BOOLEAN_TEXT.get(fmt)
    if texts is None:
        return str(value)
    return texts[0] if value else texts[1]


def render_value(value: Any, config: PathCatConfig) -> str:
    """
    Render a parameter value to its string form.

    Args:
        value: Scalar (or, for placeholders, any) value
        config: Configuration supplying the boolean format

    Returns:
        Rendered text; ``None`` renders as an empty string
    """
    if value is None:
        return ""
    # bool before int (bool is an int subclass)
    if isinstance(value, bool):
        return format_boolean(value, config.boolean_format)
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, os.PathLike):
        path = os.fspath(value)
        return path.decode("utf-8", errors="replace") if isinstance(path, bytes) else path
    return str(value)


def render_element(value: Any) -> str:
    """Render one sequence element for the query string.

    Elements use their default string form; booleans are not reformatted.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(
        value, (Enum, datetime.date, datetime.time, bytes, bytearray, os.PathLike)
    ):
        return render_value(value, _DEFAULT_CONFIG)
    return str(value)


def format_property_name(name: str, fmt: PropertyNameFormat) -> str:
    """
    Apply property name casing.

    camelCase lowercases the first character only. snake_case inserts ``_``
    before every interior uppercase letter and lowercases the result.

    Examples:
        >>> format_property_name("UserName", PropertyNameFormat.CAMEL_CASE)
        'userName'
        >>> format_property_name("UserName", PropertyNameFormat.SNAKE_CASE)
        'user_name'
    """
    if not name:
        return name
    if fmt == PropertyNameFormat.CAMEL_CASE:
        return name[0].lower() + name[1:]
    if fmt == PropertyNameFormat.SNAKE_CASE:
        return "".join(
            f"_{ch}" if i > 0 and ch.isupper() else ch for i, ch in enumerate(name)
        ).lower()
    return name


def combine_keys(prefix: str, name: str, fmt: ObjectAccessorFormat) -> str:
    """Compose a nested key from its parent prefix and child name."""
    if fmt == ObjectAccessorFormat.INDEX_BRACKETS:
        return f"{prefix}[{name}]"
    if fmt == ObjectAccessorFormat.OMIT_PARENT:
        return name
    return f"{prefix}.{name}"


_DEFAULT_CONFIG = PathCatConfig()


__all__ = [
    "combine_keys",
    "format_boolean",
    "format_property_name",
    "render_element",
    "render_value",
]
