"""Publishing messages on a ZeroMQ PUB socket."""

from __future__ import annotations

import threading
from typing import Any, Optional

import zmq

from fastsense.msg.stamped import ZMQConverter

_context: Optional[zmq.Context] = None
_context_lock = threading.Lock()

#: High-water mark of outgoing messages per subscriber.
SEND_HIGH_WATER_MARK = 2


def get_context() -> zmq.Context:
    """Return the single ZeroMQ context of the process, created with one IO thread."""
    global _context
    with _context_lock:
        if _context is None:
            _context = zmq.Context(io_threads=1)
        return _context


def _static_frame(data: Any) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    to_bytes = getattr(data, "to_bytes", None)
    if callable(to_bytes) and not isinstance(data, int):
        return to_bytes()
    raise TypeError(f"cannot send data of type {type(data).__name__}")


class Sender:
    """Publishes messages over TCP, bound on all interfaces.

    Messages that are ZMQConverter instances go out as multipart messages;
    bytes and objects with to_bytes go out as a single frame without blocking.
    Given 0, the system picks a free endpoint number to bind to.
    """

    def __init__(self, port: int) -> None:
        if not 0 <= port <= 0xFFFF:
            raise ValueError(f"invalid port {port}")
        self._socket = get_context().socket(zmq.PUB)
        try:
            self._socket.setsockopt(zmq.SNDHWM, SEND_HIGH_WATER_MARK)
            if port == 0:
                self._port = self._socket.bind_to_random_port("tcp://*")
            else:
                self._socket.bind(f"tcp://*:{port}")
                self._port = port
        except zmq.ZMQError:
            self._socket.close(linger=0)
            raise

    @property
    def port(self) -> int:
        """The number the socket is bound to."""
        return self._port

    @property
    def closed(self) -> bool:
        return self._socket.closed

    def send(self, data: Any) -> None:
        """Publish one message."""
        if isinstance(data, ZMQConverter):
            self._socket.send_multipart(data.to_frames())
            return
        frame = _static_frame(data)
        try:
            self._socket.send(frame, zmq.NOBLOCK)
        except zmq.Again:
            pass

    def close(self) -> None:
        """Close the socket, dropping unsent messages."""
        self._socket.close(linger=0)

    def __enter__(self) -> Sender:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()