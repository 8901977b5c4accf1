"""Receiving messages from a ZeroMQ publisher."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Tuple, get_args, get_origin

import zmq

from fastsense.comm.sender import get_context
from fastsense.msg.stamped import Stamped, ZMQConverter

#: Default time in milliseconds to wait for a message.
DEFAULT_TIMEOUT_MS = 100


def _make_decoder(message_type: Any, data_type: Any) -> Tuple[bool, Callable[[Any], Any]]:
    """Return whether the message is multipart and the function that decodes it."""
    origin = get_origin(message_type) or message_type
    args = get_args(message_type)
    if isinstance(origin, type) and issubclass(origin, Stamped):
        inner = data_type if data_type is not None else (args[0] if args else None)
        if inner is None:
            raise TypeError("a Stamped message needs a data type")

        def decode_stamped(frames: Sequence[Any]) -> Any:
            return origin.from_frames(frames, inner)

        return True, decode_stamped
    if isinstance(origin, type) and issubclass(origin, ZMQConverter):
        return True, origin.from_frames
    if origin is bytes:
        return False, bytes
    from_bytes = getattr(origin, "from_bytes", None)
    if callable(from_bytes) and origin is not int:
        return False, from_bytes
    raise TypeError(f"cannot receive messages of type {message_type!r}")


class Receiver:
    """Subscribes to every message of a publisher and decodes it as message_type.

    ZMQConverter types, including Stamped[...], are read as multipart
    messages; bytes and types with from_bytes are read from a single frame.
    """

    def __init__(
        self,
        addr: str,
        port: int,
        message_type: Any,
        timeout_ms: float = DEFAULT_TIMEOUT_MS,
        *,
        data_type: Any = None,
    ) -> None:
        if not addr:
            raise ValueError("Can't connect to address ''")
        if timeout_ms < 0:
            raise ValueError("Invalid timeout chosen")
        self._multipart, self._decode = _make_decoder(message_type, data_type)
        self._timeout_ms = timeout_ms
        self._socket = get_context().socket(zmq.SUB)
        try:
            self._socket.connect(f"tcp://{addr}:{port}")
            self._socket.setsockopt(zmq.SUBSCRIBE, b"")
        except zmq.ZMQError:
            self._socket.close(linger=0)
            raise

    @property
    def timeout_ms(self) -> float:
        return self._timeout_ms

    def poll_successful(self) -> bool:
        """Wait up to the timeout; return True if a message is ready."""
        return bool(self._socket.poll(self._timeout_ms, zmq.POLLIN) & zmq.POLLIN)

    def receive(self) -> Optional[Any]:
        """Return the next message, or None if none arrived within the timeout."""
        if not self.poll_successful():
            return None
        if self._multipart:
            return self._decode(self._socket.recv_multipart())
        return self._decode(self._socket.recv())

    def close(self) -> None:
        self._socket.close(linger=0)

    def __enter__(self) -> Receiver:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()