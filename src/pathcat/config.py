"""
PathCat Configuration Module

Provides the immutable configuration that controls how parameters are
flattened and rendered into a URL: boolean text, array layout, property
name casing, nested key composition and the working buffer capacity.
"""

from dataclasses import asdict, dataclass, fields, replace as dataclass_replace
from enum import Enum
from typing import Any

from .exceptions import ConfigValidationError


DEFAULT_BUFFER_SIZE = 2048


class BooleanFormat(str, Enum):
    """Boolean value rendering."""

    DEFAULT = "default"  # True / False
    LOWERCASE = "lowercase"  # true / false
    NUMERIC = "numeric"  # 1 / 0
    ON_OFF = "on_off"  # on / off


class ArrayFormat(str, Enum):
    """Query string layout for sequence values."""

    REPEAT = "repeat"  # key=a&key=b
    INDEXED = "indexed"  # key[0]=a&key[1]=b
    DELIMITED = "delimited"  # key=a,b


class PropertyNameFormat(str, Enum):
    """Casing applied to attribute names while flattening."""

    DEFAULT = "default"  # as given
    CAMEL_CASE = "camel_case"
    SNAKE_CASE = "snake_case"


class ObjectAccessorFormat(str, Enum):
    """Composition of nested keys from a parent prefix and a child name."""

    DOT_NOTATION = "dot_notation"  # parent.child
    INDEX_BRACKETS = "index_brackets"  # parent[child]
    OMIT_PARENT = "omit_parent"  # child


class IntrospectionMode(str, Enum):
    """How structured parameters are enumerated."""

    ATTRIBUTES = "attributes"  # walk fields and attributes directly
    JSON = "json"  # serialize to a JSON tree first, then walk it


_ENUM_FIELDS: dict[str, type[Enum]] = {
    "boolean_format": BooleanFormat,
    "array_format": ArrayFormat,
    "property_name_format": PropertyNameFormat,
    "object_accessor_format": ObjectAccessorFormat,
    "introspection": IntrospectionMode,
}


@dataclass(frozen=True)
class PathCatConfig:
    """
    Configuration for URL building.

    Instances are immutable; use ``replace()`` to derive a modified copy.

    Attributes:
        boolean_format: Rendering of boolean values
        array_format: Query layout for sequence values
        array_delimiter: Single character joining elements for ``ArrayFormat.DELIMITED``
        property_name_format: Casing applied to attribute names
        object_accessor_format: Composition of nested keys
        introspection: Strategy used to enumerate structured parameters
        json_by_alias: Use field aliases when ``introspection`` is ``JSON``
        buffer_size: Capacity of the working buffer in characters

    Examples:
        Default configuration:
        >>> config = PathCatConfig()
        >>> config.array_format
        <ArrayFormat.REPEAT: 'repeat'>

        Delimited arrays with a custom separator:
        >>> config = PathCatConfig(array_format=ArrayFormat.DELIMITED, array_delimiter="|")
    """

    boolean_format: BooleanFormat = BooleanFormat.DEFAULT
    array_format: ArrayFormat = ArrayFormat.REPEAT
    array_delimiter: str = ","
    property_name_format: PropertyNameFormat = PropertyNameFormat.DEFAULT
    object_accessor_format: ObjectAccessorFormat = ObjectAccessorFormat.DOT_NOTATION
    introspection: IntrospectionMode = IntrospectionMode.ATTRIBUTES
    json_by_alias: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self) -> None:
        """Coerce enum values given as strings and validate the rest."""
        for name, enum_type in _ENUM_FIELDS.items():
            value = getattr(self, name)
            if not isinstance(value, enum_type):
                try:
                    # frozen dataclass: bypass __setattr__ for coercion
                    object.__setattr__(self, name, enum_type(value))
                except ValueError:
                    raise ConfigValidationError(
                        f"Invalid value for {name}",
                        config_key=name,
                        config_value=value,
                    ) from None

        if not isinstance(self.array_delimiter, str) or len(self.array_delimiter) != 1:
            raise ConfigValidationError(
                "array_delimiter must be a single character",
                config_key="array_delimiter",
                config_value=self.array_delimiter,
            )

        if (
            not isinstance(self.buffer_size, int)
            or isinstance(self.buffer_size, bool)
            or self.buffer_size <= 0
        ):
            raise ConfigValidationError(
                "buffer_size must be a positive integer",
                config_key="buffer_size",
                config_value=self.buffer_size,
            )

    def replace(self, **changes: Any) -> "PathCatConfig":
        """Return a copy of this configuration with ``changes`` applied."""
        return dataclass_replace(self, **changes)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "PathCatConfig":
        """
        Create configuration from dictionary.

        Unknown keys are rejected so typos in configuration files surface early.

        Args:
            config_dict: Configuration dictionary (enum values may be strings)

        Returns:
            PathCatConfig instance
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ConfigValidationError(
                "Unknown configuration keys",
                config_key=", ".join(unknown),
            )
        return cls(**config_dict)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert configuration to dictionary.

        Returns:
            Configuration as dictionary with enum members as their string values
        """
        result = asdict(self)
        for name in _ENUM_FIELDS:
            result[name] = result[name].value
        return result


__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "ArrayFormat",
    "BooleanFormat",
    "IntrospectionMode",
    "ObjectAccessorFormat",
    "PathCatConfig",
    "PropertyNameFormat",
]
