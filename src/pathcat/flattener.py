"""Flatten structured parameters into a single-level ``ParameterMap``.

Nested objects are walked recursively and their keys composed according to
the configured accessor format. Scalars are stored as-is, sequences are
collected into lists (their elements are not flattened further), and
``None`` values are skipped.
"""

import dataclasses
import datetime
import numbers
import os
import uuid
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from .config import IntrospectionMode, PathCatConfig
from .formatting import combine_keys, format_property_name
from .log_config import get_context_logger
from .types import ParameterMap


logger = get_context_logger("pathcat.flattener")

SCALAR_TYPES: tuple[type, ...] = (
    numbers.Number,
    str,
    bytes,
    bytearray,
    Enum,
    datetime.date,
    datetime.time,
    uuid.UUID,
    os.PathLike,
)


def is_scalar(value: Any) -> bool:
    """Return True for values stored directly in the parameter map."""
    return isinstance(value, SCALAR_TYPES)


def _is_namedtuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def is_sequence(value: Any) -> bool:
    """Return True for ordered, non-string, non-mapping iterables."""
    return (
        isinstance(value, Iterable)
        and not is_scalar(value)
        and not isinstance(value, Mapping)
        and not _is_namedtuple(value)
    )


def _is_flat_mapping(value: Any) -> bool:
    if isinstance(value, ParameterMap):
        return True
    if not isinstance(value, Mapping):
        return False
    return all(v is None or is_scalar(v) or is_sequence(v) for v in value.values())


def iter_fields(obj: Any) -> Iterator[tuple[str, Any]]:
    """
    Enumerate the named fields of a structured value.

    Supports mappings, pydantic models, dataclasses, named tuples, objects
    with ``__slots__`` and plain objects (public instance attributes plus
    readable properties). Attributes whose access raises are skipped.

    Args:
        obj: Structured value

    Yields:
        ``(name, value)`` pairs in declaration order
    """
    if isinstance(obj, Mapping):
        for key, value in obj.items():
            yield str(key), value
        return

    if isinstance(obj, BaseModel):
        for name in type(obj).model_fields:
            yield name, getattr(obj, name, None)
        return

    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        for f in dataclasses.fields(obj):
            yield f.name, getattr(obj, f.name, None)
        return

    if _is_namedtuple(obj):
        yield from zip(obj._fields, obj)
        return

    seen: set[str] = set()
    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        for name, value in instance_dict.items():
            if not name.startswith("_"):
                seen.add(name)
                yield name, value

    for cls in type(obj).__mro__:
        slots = vars(cls).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name.startswith("_") or name in seen:
                continue
            seen.add(name)
            try:
                value = getattr(obj, name)
            except AttributeError:
                continue
            yield name, value

        for name, attr in vars(cls).items():
            if name.startswith("_") or name in seen or not isinstance(attr, property):
                continue
            seen.add(name)
            try:
                value = getattr(obj, name)
            except Exception as e:
                logger.debug("Skipping unreadable property", property=name, error=str(e))
                continue
            yield name, value


def to_json_tree(obj: Any, by_alias: bool = False) -> Any:
    """Serialize ``obj`` to a tree of dict/list/str/int/float/bool/None."""
    return to_jsonable_python(
        obj,
        by_alias=by_alias,
        fallback=_json_fallback,
    )


def _json_fallback(obj: Any) -> Any:
    fields = dict(iter_fields(obj))
    if fields:
        return fields
    return str(obj)


def flatten(parameters: Any, config: PathCatConfig) -> ParameterMap:
    """
    Flatten ``parameters`` into a ``ParameterMap``.

    A ``ParameterMap`` or a mapping whose values are all scalars, sequences
    or ``None`` is treated as pre-flattened and copied verbatim, without any
    name or accessor formatting. Anything else is walked.

    Args:
        parameters: Arbitrary structured value
        config: Naming, accessor and introspection options

    Returns:
        Ordered, case-insensitive parameter map
    """
    result = ParameterMap()
    if parameters is None:
        return result

    if _is_flat_mapping(parameters):
        for key, value in parameters.items():
            result[str(key)] = value
        return result

    source = parameters
    if config.introspection == IntrospectionMode.JSON:
        source = to_json_tree(parameters, by_alias=config.json_by_alias)

    _fill(result, "", source, config, set())

    logger.debug(
        "Parameters flattened",
        parameters_type=type(parameters).__name__,
        introspection=config.introspection.value,
        keys=list(result.keys()),
    )
    return result


def _fill(
    result: ParameterMap,
    prefix: str,
    obj: Any,
    config: PathCatConfig,
    active: set[int],
) -> None:
    if obj is None:
        return

    if is_sequence(obj):
        result[prefix] = list(obj)
        return

    if is_scalar(obj):
        # a bare scalar has no named fields
        return

    # ids of the objects on the current walk path; a field leading back to
    # one of them is skipped
    active.add(id(obj))
    try:
        for name, value in iter_fields(obj):
            if value is None:
                continue

            name = format_property_name(name, config.property_name_format)
            key = combine_keys(prefix, name, config.object_accessor_format) if prefix else name

            if is_scalar(value):
                result[key] = value
            elif is_sequence(value):
                result[key] = list(value)
            elif id(value) in active:
                logger.debug("Skipping cyclic reference", key=key)
            else:
                _fill(result, key, value, config, active)
    finally:
        active.discard(id(obj))


__all__ = [
    "flatten",
    "is_scalar",
    "is_sequence",
    "iter_fields",
    "to_json_tree",
]
