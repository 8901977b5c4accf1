"""Moving-average filter over a fixed-size window."""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Tuple


class SlidingWindowFilter:
    """Average over the last window_size values, updated incrementally.

    While the window is still filling, update returns the new value itself;
    afterwards it returns the running mean.
    """

    def __init__(self, window_size: int, zero: Any = 0.0) -> None:
        self._window_size = float(window_size)
        self._buffer: Deque[Any] = deque()
        self._mean = zero

    def update(self, new_value):
        """Feed one measurement and return the filtered value."""
        if self._window_size < 2:
            return new_value

        self._buffer.append(new_value)

        if len(self._buffer) <= self._window_size:
            self._mean = self._mean + new_value / self._window_size
            return new_value

        self._mean = self._mean + (self._buffer[-1] - self._buffer[0]) / self._window_size
        self._buffer.popleft()
        return self._mean

    @property
    def buffer(self) -> Tuple[Any, ...]:
        """Values currently inside the window, oldest first."""
        return tuple(self._buffer)

    @property
    def mean(self):
        """The current mean."""
        return self._mean