"""Rigid transform with scaling, as exchanged between devices."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

from fastsense.msg.stamped import Stamped, ZMQConverter
from fastsense.ring_buffer import ConcurrentRingBuffer

_VEC3 = struct.Struct("<3f")
_QUAT = struct.Struct("<4f")
_SCALING = struct.Struct("<f")


def _frame(frames: List[Any], index: int, fmt: struct.Struct, what: str) -> Tuple[float, ...]:
    data = bytes(frames[index])
    if len(data) != fmt.size:
        raise ValueError(f"{what} frame must be {fmt.size} bytes, got {len(data)}")
    return fmt.unpack(data)


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion; the default is the identity."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Transform(ZMQConverter):
    """Rotation, translation and scaling factor."""

    rotation: Quaternion = field(default_factory=Quaternion)
    translation: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    scaling: float = 1.0

    def to_frames(self) -> List[bytes]:
        """Encode as translation, rotation (x, y, z, w) and scaling frames."""
        q = self.rotation
        return [
            _VEC3.pack(*self.translation),
            _QUAT.pack(q.x, q.y, q.z, q.w),
            _SCALING.pack(self.scaling),
        ]

    @classmethod
    def from_frames(cls, frames: Sequence[Any]) -> Transform:
        """Decode the three frames written by to_frames."""
        frames = list(frames)
        if len(frames) < 3:
            raise ValueError(f"transform needs 3 frames, got {len(frames)}")
        translation = _frame(frames, 0, _VEC3, "translation")
        x, y, z, w = _frame(frames, 1, _QUAT, "rotation")
        (scaling,) = _frame(frames, 2, _SCALING, "scaling")
        return cls(Quaternion(w, x, y, z), tuple(translation), scaling)


TransformStamped = Stamped[Transform]
TransformStampedBuffer = ConcurrentRingBuffer[TransformStamped]