"""Type definitions for the PathCat package."""

import datetime
import numbers
import os
import uuid
from collections.abc import Iterator, Mapping, MutableMapping, Sequence
from enum import Enum
from typing import Any, Union


# Values stored directly in a flattened map
ScalarValue = Union[
    bool,
    numbers.Number,
    str,
    bytes,
    bytearray,
    Enum,
    datetime.date,
    datetime.time,
    uuid.UUID,
    os.PathLike,
]

# A flattened value: a scalar, a collected sequence, or None
ParameterValue = Union[ScalarValue, Sequence[Any], None]


class ParameterMap(MutableMapping[str, Any]):
    """Ordered mapping with case-insensitive string keys.

    Lookups ignore case; iteration yields keys in insertion order with the
    casing under which they were first inserted. Assigning to an existing
    key under any casing replaces the value in place (last writer wins)
    without moving it or changing its recorded casing.

    Example:
        >>> params = ParameterMap({"UserId": 1})
        >>> params["userid"] = 2
        >>> list(params.items())
        [('UserId', 2)]
    """

    __slots__ = ("_data",)

    def __init__(self, initial: Mapping[str, Any] | None = None, **kwargs: Any):
        # folded key -> (original key, value)
        self._data: dict[str, tuple[str, Any]] = {}
        if initial is not None:
            self.update(initial)
        if kwargs:
            self.update(kwargs)

    @staticmethod
    def _fold(key: str) -> str:
        return key.casefold()

    def __getitem__(self, key: str) -> Any:
        return self._data[self._fold(key)][1]

    def __setitem__(self, key: str, value: Any) -> None:
        folded = self._fold(key)
        existing = self._data.get(folded)
        original = existing[0] if existing is not None else key
        self._data[folded] = (original, value)

    def __delitem__(self, key: str) -> None:
        del self._data[self._fold(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._fold(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def copy(self) -> "ParameterMap":
        """Return a shallow copy preserving order and key casing."""
        clone = ParameterMap()
        clone._data = dict(self._data)
        return clone

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"ParameterMap({{{items}}})"


__all__ = ["ParameterMap", "ParameterValue", "ScalarValue"]
