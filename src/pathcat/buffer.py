"""Bounded character buffer used to assemble URLs in place.

``UrlBuffer`` is a fixed-capacity character array with a logical length
cursor. Content grows by ``append`` and is edited by ``splice``; both
refuse to go past the capacity. ``BufferPool`` hands buffers out for the
exclusive use of a single build call.
"""

import contextlib
import threading
from collections.abc import Iterator

from .config import DEFAULT_BUFFER_SIZE
from .exceptions import BufferOverflowError


class UrlBuffer:
    """Fixed-capacity mutable character buffer.

    Only ``[0, len(buffer))`` holds meaningful content; anything at or past
    the cursor is stale and never read.

    Example:
        >>> buf = UrlBuffer(16)
        >>> buf.append("/users/:id")
        >>> buf.splice(7, 10, "42")
        >>> buf.getvalue()
        '/users/42'
    """

    __slots__ = ("_chars", "_cursor")

    def __init__(self, capacity: int = DEFAULT_BUFFER_SIZE):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._chars: list[str] = [""] * capacity
        self._cursor = 0

    @property
    def capacity(self) -> int:
        """Maximum number of characters the buffer can hold."""
        return len(self._chars)

    def __len__(self) -> int:
        return self._cursor

    def __getitem__(self, index: int) -> str:
        if index < 0:
            index += self._cursor
        if not 0 <= index < self._cursor:
            raise IndexError("buffer index out of range")
        return self._chars[index]

    def reset(self) -> None:
        """Discard content by moving the cursor back to zero."""
        self._cursor = 0

    def getvalue(self) -> str:
        """Return the written content ``[0, len(buffer))``."""
        return "".join(self._chars[: self._cursor])

    def append(self, text: str) -> None:
        """Copy ``text`` at the cursor and advance it.

        Raises:
            BufferOverflowError: If the text does not fit
        """
        end = self._cursor + len(text)
        self._ensure_capacity(end)
        self._chars[self._cursor : end] = text
        self._cursor = end

    def splice(self, start: int, end: int, replacement: str) -> None:
        """Replace ``[start, end)`` with ``replacement``.

        Content after ``end`` shifts by ``len(replacement) - (end - start)``
        and the cursor moves by the same amount.

        Raises:
            ValueError: If the range is not inside the written content
            BufferOverflowError: If the result does not fit
        """
        if not 0 <= start <= end <= self._cursor:
            raise ValueError(
                f"splice range [{start}, {end}) outside buffer content [0, {self._cursor})"
            )
        delta = len(replacement) - (end - start)
        self._ensure_capacity(self._cursor + delta)
        if delta:
            self._move(end, end + delta, self._cursor - end)
        self._chars[start : start + len(replacement)] = replacement
        self._cursor += delta

    def _move(self, src: int, dst: int, length: int) -> None:
        """Move ``length`` characters from ``src`` to ``dst``; ranges may overlap."""
        if length <= 0 or src == dst:
            return
        chars = self._chars
        if dst > src:
            # growing: copy from the end so unread source is not clobbered
            for i in range(length - 1, -1, -1):
                chars[dst + i] = chars[src + i]
        else:
            for i in range(length):
                chars[dst + i] = chars[src + i]

    def _ensure_capacity(self, required: int) -> None:
        if required > len(self._chars):
            raise BufferOverflowError(
                "Buffer overflow",
                capacity=len(self._chars),
                required=required,
            )

    def __repr__(self) -> str:
        return f"UrlBuffer(capacity={self.capacity}, length={self._cursor})"


class BufferPool:
    """Pool of equally sized buffers with exclusive checkout.

    A buffer checked out through ``checkout()`` is owned by the caller until
    the context exits; it is reset before being handed out. Safe to share
    between threads.
    """

    def __init__(self, capacity: int = DEFAULT_BUFFER_SIZE, max_idle: int = 8):
        self.capacity = capacity
        self.max_idle = max_idle
        self._idle: list[UrlBuffer] = []
        self._lock = threading.Lock()

    @contextlib.contextmanager
    def checkout(self) -> Iterator[UrlBuffer]:
        """Borrow a reset buffer for the duration of the ``with`` block."""
        with self._lock:
            buffer = self._idle.pop() if self._idle else None
        if buffer is None:
            buffer = UrlBuffer(self.capacity)
        buffer.reset()
        try:
            yield buffer
        finally:
            with self._lock:
                if len(self._idle) < self.max_idle:
                    self._idle.append(buffer)

    @property
    def idle_count(self) -> int:
        """Number of buffers currently waiting in the pool."""
        with self._lock:
            return len(self._idle)

    def clear(self) -> None:
        """Drop all idle buffers."""
        with self._lock:
            self._idle.clear()


# Global pools keyed by capacity
_pools: dict[int, BufferPool] = {}
_pools_lock = threading.Lock()


def get_buffer_pool(capacity: int = DEFAULT_BUFFER_SIZE) -> BufferPool:
    """Get the process-wide buffer pool for ``capacity``."""
    with _pools_lock:
        pool = _pools.get(capacity)
        if pool is None:
            pool = _pools[capacity] = BufferPool(capacity)
        return pool


__all__ = ["BufferPool", "UrlBuffer", "get_buffer_pool"]
