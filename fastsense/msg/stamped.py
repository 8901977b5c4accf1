"""Timestamped messages and the multipart wire conversion they share."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, List, Sequence, TypeVar

from fastsense.constants import now

T = TypeVar("T")

_TIMESTAMP = struct.Struct("<q")


class ZMQConverter(ABC):
    """A message that is sent as a sequence of byte frames."""

    @abstractmethod
    def to_frames(self) -> List[bytes]:
        """Encode the message as a list of frames."""

    @classmethod
    @abstractmethod
    def from_frames(cls, frames: Sequence[Any]):
        """Decode a message from its frames."""


def _encode_data(data: Any) -> List[bytes]:
    if isinstance(data, ZMQConverter):
        return data.to_frames()
    if isinstance(data, (bytes, bytearray, memoryview)):
        return [bytes(data)]
    to_bytes = getattr(data, "to_bytes", None)
    if callable(to_bytes) and not isinstance(data, int):
        return [to_bytes()]
    raise TypeError(f"cannot encode data of type {type(data).__name__}")


def _decode_data(frames: Sequence[Any], data_type: Any) -> Any:
    if isinstance(data_type, type) and issubclass(data_type, ZMQConverter):
        return data_type.from_frames(frames)
    if not frames:
        raise ValueError("message has no data frame")
    if data_type is bytes:
        return bytes(frames[0])
    from_bytes = getattr(data_type, "from_bytes", None)
    if callable(from_bytes) and data_type is not int:
        return from_bytes(bytes(frames[0]))
    raise TypeError(f"cannot decode data of type {getattr(data_type, '__name__', data_type)!r}")


@dataclass
class Stamped(ZMQConverter, Generic[T]):
    """Data together with the time, in nanoseconds since the epoch, it was recorded."""

    data: T
    timestamp: int = field(default_factory=now)

    def to_frames(self) -> List[bytes]:
        """Encode as a timestamp frame followed by the frames of the data."""
        return [_TIMESTAMP.pack(self.timestamp), *_encode_data(self.data)]

    @classmethod
    def from_frames(cls, frames: Sequence[Any], data_type: Any) -> Stamped:
        """Decode a timestamp frame followed by data of the given type."""
        frames = list(frames)
        if not frames:
            raise ValueError("message has no timestamp frame")
        stamp = bytes(frames[0])
        if len(stamp) != _TIMESTAMP.size:
            raise ValueError(f"timestamp frame must be {_TIMESTAMP.size} bytes, got {len(stamp)}")
        (timestamp,) = _TIMESTAMP.unpack(stamp)
        return cls(_decode_data(frames[1:], data_type), timestamp)

    def update_time(self) -> None:
        """Set the timestamp to the current time."""
        self.timestamp = now()