"""Bounded FIFO ring buffer safe for use by several threads."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Deque, Generic, Optional, TypeVar

T = TypeVar("T")


class BufferEmpty(LookupError):
    """Raised when no element could be taken from a ring buffer."""


class ConcurrentRingBuffer(Generic[T]):
    """Fixed-capacity FIFO with blocking and non-blocking push, pop and peek."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("ring buffer size must be at least 1")
        self._capacity = size
        self._items: Deque[T] = deque()
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)

    def _do_push(self, val: T) -> None:
        self._items.append(val)
        self._not_empty.notify_all()

    def _do_pop(self) -> T:
        val = self._items.popleft()
        self._not_full.notify_all()
        return val

    def _wait_not_empty(self, timeout_ms: Optional[float]) -> None:
        timeout = None if timeout_ms is None else timeout_ms / 1000.0
        if not self._not_empty.wait_for(lambda: bool(self._items), timeout=timeout):
            raise BufferEmpty("no element available")

    def push_nb(self, val: T, force: bool = False) -> bool:
        """Push without blocking; return False if full, or drop the oldest when forced."""
        with self._lock:
            if len(self._items) >= self._capacity:
                if not force:
                    return False
                self._do_pop()
            self._do_push(val)
            return True

    def push(self, val: T) -> None:
        """Push, blocking until there is room."""
        with self._lock:
            self._not_full.wait_for(lambda: len(self._items) < self._capacity)
            self._do_push(val)

    def pop_nb(self, timeout_ms: float = 0) -> T:
        """Pop the oldest element, waiting at most timeout_ms; raise BufferEmpty otherwise."""
        with self._lock:
            self._wait_not_empty(timeout_ms)
            return self._do_pop()

    def pop(self) -> T:
        """Pop the oldest element, blocking until one is available."""
        with self._lock:
            self._wait_not_empty(None)
            return self._do_pop()

    def pop_nb_if(self, func: Callable[[T], bool], timeout_ms: float = 0) -> T:
        """Pop the oldest element if func accepts it; raise BufferEmpty on timeout or rejection."""
        with self._lock:
            self._wait_not_empty(timeout_ms)
            if not func(self._items[0]):
                raise BufferEmpty("oldest element was not accepted")
            return self._do_pop()

    def pop_if(self, func: Callable[[T], bool]) -> T:
        """Wait for an element and pop it if func accepts it; raise BufferEmpty on rejection."""
        with self._lock:
            self._wait_not_empty(None)
            if not func(self._items[0]):
                raise BufferEmpty("oldest element was not accepted")
            return self._do_pop()

    def peek_nb(self, timeout_ms: float = 0) -> T:
        """Return the oldest element without removing it, waiting at most timeout_ms."""
        with self._lock:
            self._wait_not_empty(timeout_ms)
            return self._items[0]

    def peek(self) -> T:
        """Return the oldest element without removing it, blocking until one exists."""
        with self._lock:
            self._wait_not_empty(None)
            return self._items[0]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self._not_full.notify_all()

    def __len__(self) -> int:
        return len(self._items)

    def capacity(self) -> int:
        return self._capacity

    def empty(self) -> bool:
        return not self._items

    def full(self) -> bool:
        return len(self._items) == self._capacity