"""Background worker threads with start/stop control."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Optional


class ProcessThread(ABC):
    """Runs thread_run in a worker thread between start and stop.

    thread_run should loop while self.running is true.
    """

    def __init__(self) -> None:
        self._worker: Optional[threading.Thread] = None
        self._running = False

    @property
    def running(self) -> bool:
        """Whether the worker has been started and not yet stopped."""
        return self._running

    def start(self) -> None:
        """Start the worker thread unless it is already running."""
        if not self._running:
            self._running = True
            self._worker = threading.Thread(target=self.thread_run, daemon=True)
            self._worker.start()

    def stop(self) -> None:
        """Ask the worker to finish and wait for it."""
        if self._running and self._worker is not None:
            self._running = False
            self._worker.join()

    @abstractmethod
    def thread_run(self) -> None:
        """Body of the worker thread."""


class Runner:
    """Starts a ProcessThread on creation and stops it on leaving the with block."""

    def __init__(self, obj: ProcessThread) -> None:
        self._object = obj
        self._object.start()

    def __enter__(self) -> ProcessThread:
        return self._object

    def __exit__(self, exc_type, exc, tb) -> None:
        self._object.stop()