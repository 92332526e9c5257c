"""Fixed-size single-producer/single-consumer FIFO."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """Circular FIFO of a power-of-two size; one slot stays free, so it holds size - 1 items."""

    def __init__(self, size: int = 128) -> None:
        if size < 2 or size & (size - 1):
            raise ValueError("ring buffer size must be a power of two, at least 2")
        self._size = size
        self._buf: list[T | None] = [None] * size
        self._write = 0
        self._read = 0

    @property
    def capacity(self) -> int:
        return self._size - 1

    def push(self, item: T) -> None:
        """Append an item; raise OverflowError when the buffer is full."""
        nxt = (self._write + 1) & (self._size - 1)
        if nxt == self._read:
            raise OverflowError("ring buffer is full")
        self._buf[self._write] = item
        self._write = nxt

    def pop(self) -> T:
        """Remove and return the oldest item; raise IndexError when empty."""
        if self._read == self._write:
            raise IndexError("pop from empty ring buffer")
        item = self._buf[self._read]
        self._buf[self._read] = None
        self._read = (self._read + 1) & (self._size - 1)
        return item  # type: ignore[return-value]

    def __len__(self) -> int:
        return (self._write - self._read) & (self._size - 1)

    def __bool__(self) -> bool:
        return self._read != self._write