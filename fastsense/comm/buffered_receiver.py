"""Threads that receive messages and put them into ring buffers."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from fastsense.comm.receiver import Receiver
from fastsense.msg.imu import ImuStamped, ImuStampedBuffer
from fastsense.msg.point_cloud import PointCloudPtrStampedBuffer, PointCloudStamped
from fastsense.process_thread import ProcessThread
from fastsense.ring_buffer import ConcurrentRingBuffer


class BufferedReceiver(ProcessThread):
    """Receives messages in a worker thread and writes them into a buffer."""

    def __init__(
        self,
        addr: str,
        port: int,
        timeout_ms: float,
        buffer: ConcurrentRingBuffer,
        message_type: Any,
    ) -> None:
        super().__init__()
        self._receiver = Receiver(addr, port, message_type, timeout_ms)
        self._buffer = buffer

    @property
    def buffer(self) -> ConcurrentRingBuffer:
        return self._buffer

    @abstractmethod
    def receive(self) -> bool:
        """Receive one message; return True if one arrived."""

    def thread_run(self) -> None:
        while self.running:
            self.receive()

    def close(self) -> None:
        """Stop the worker and close the connection."""
        self.stop()
        self._receiver.close()

    def __enter__(self) -> BufferedReceiver:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class BufferedImuStampedReceiver(BufferedReceiver):
    """Receives timestamped IMU readings into an IMU buffer."""

    def __init__(self, addr: str, port: int, timeout_ms: float, buffer: ImuStampedBuffer) -> None:
        super().__init__(addr, port, timeout_ms, buffer, ImuStamped)

    def receive(self) -> bool:
        msg = self._receiver.receive()
        if msg is None:
            return False
        self._buffer.push_nb(msg)
        return True


class BufferedPclStampedReceiver(BufferedReceiver):
    """Receives timestamped point clouds into a point cloud buffer."""

    def __init__(
        self, addr: str, port: int, timeout_ms: float, buffer: PointCloudPtrStampedBuffer
    ) -> None:
        super().__init__(addr, port, timeout_ms, buffer, PointCloudStamped)

    def receive(self) -> bool:
        msg = self._receiver.receive()
        if msg is None:
            return False
        self._buffer.push_nb(msg)
        return True