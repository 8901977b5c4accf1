"""Thread-safe lists of event handlers that can be removed through handles."""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict


class EventHandlerHandle:
    """Identifies one handler registered with an EventHandlerList."""

    __slots__ = ("_owner",)

    def __init__(self, owner: EventHandlerList) -> None:
        self._owner = owner

    def remove(self) -> None:
        """Remove the associated handler from its list."""
        self._owner.remove(self)


class EventHandlerList:
    """Ordered collection of callbacks that are invoked together."""

    def __init__(self) -> None:
        self._callbacks: Dict[EventHandlerHandle, Callable[..., Any]] = {}
        self._lock = threading.Lock()

    def add(self, callback: Callable[..., Any]) -> EventHandlerHandle:
        """Register a callback and return the handle that removes it."""
        handle = EventHandlerHandle(self)
        with self._lock:
            self._callbacks[handle] = callback
        return handle

    def remove(self, handle: EventHandlerHandle) -> None:
        """Remove the callback belonging to handle; unknown handles are ignored."""
        with self._lock:
            self._callbacks.pop(handle, None)

    def invoke(self, *args: Any, **kwargs: Any) -> None:
        """Call every registered callback, in order of registration."""
        with self._lock:
            callbacks = list(self._callbacks.values())
        for callback in callbacks:
            callback(*args, **kwargs)

    def __len__(self) -> int:
        return len(self._callbacks)