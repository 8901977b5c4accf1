"""Destinations for log messages."""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from typing import Union


class Sink(ABC):
    """Something a formatted log message can be written to."""

    @abstractmethod
    def write(self, msg: str) -> None:
        """Write one message."""


class CoutSink(Sink):
    """Writes messages to standard output."""

    def write(self, msg: str) -> None:
        sys.stdout.write(msg)


class FileSink(Sink):
    """Writes messages to a file, flushing after each one."""

    def __init__(self, filename: Union[str, os.PathLike], mode: str = "a") -> None:
        self._file = open(filename, mode, encoding="utf-8")

    def write(self, msg: str) -> None:
        self._file.write(msg)
        self._file.flush()

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> FileSink:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()