"""Forwarding messages from one ring buffer to another while publishing them."""

from __future__ import annotations

from typing import Any, Optional

from fastsense.comm.sender import Sender
from fastsense.constants import DEFAULT_POP_TIMEOUT
from fastsense.process_thread import ProcessThread
from fastsense.ring_buffer import BufferEmpty, ConcurrentRingBuffer


class QueueBridge(ProcessThread):
    """Pops from an input buffer, pushes into an output buffer and publishes each value.

    With force, values are pushed without blocking, dropping the oldest
    element of a full output buffer. Without an output buffer values are only
    published; with send disabled they are only forwarded.
    """

    def __init__(
        self,
        in_buffer: ConcurrentRingBuffer,
        out_buffer: Optional[ConcurrentRingBuffer],
        port: int,
        send: bool = True,
        force: bool = False,
    ) -> None:
        super().__init__()
        self._in = in_buffer
        self._out = out_buffer
        self._sender = Sender(port)
        self._send_enabled = send
        self._force = force

    @property
    def port(self) -> int:
        """The port values are published on."""
        return self._sender.port

    def thread_run(self) -> None:
        while self.running:
            try:
                val = self._in.pop_nb(DEFAULT_POP_TIMEOUT)
            except BufferEmpty:
                continue
            if self._out is not None:
                if self._force:
                    self._out.push_nb(val, True)
                else:
                    self._out.push(val)
            if self._send_enabled:
                self.send(val)

    def send(self, val: Any) -> None:
        """Publish one value taken from the input buffer."""
        self._sender.send(val)

    def close(self) -> None:
        """Stop the worker and close the publisher."""
        self.stop()
        self._sender.close()

    def __enter__(self) -> QueueBridge:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()