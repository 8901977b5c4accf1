"""Point clouds with a fixed number of rings."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

from fastsense.msg.stamped import Stamped, ZMQConverter
from fastsense.ring_buffer import ConcurrentRingBuffer

_RINGS = struct.Struct("<H")
_POINT = struct.Struct("<3i")
_SCALING = struct.Struct("<f")

ScanPoint = Tuple[int, int, int]


def _unpack_single(fmt: struct.Struct, frame: Any, what: str):
    data = bytes(frame)
    if len(data) != fmt.size:
        raise ValueError(f"{what} frame must be {fmt.size} bytes, got {len(data)}")
    return fmt.unpack(data)[0]


@dataclass
class PointCloud(ZMQConverter):
    """Integer scan points stored column by column, one point per ring in each column."""

    points: List[ScanPoint] = field(default_factory=list)
    rings: int = 0
    scaling: float = 1.0

    def to_frames(self) -> List[bytes]:
        """Encode as a ring-count frame, a frame of packed points and a scaling frame."""
        return [
            _RINGS.pack(self.rings),
            b"".join(_POINT.pack(*point) for point in self.points),
            _SCALING.pack(self.scaling),
        ]

    @classmethod
    def from_frames(cls, frames: Sequence[Any]) -> PointCloud:
        """Decode the three frames written by to_frames."""
        frames = list(frames)
        if len(frames) < 3:
            raise ValueError(f"point cloud needs 3 frames, got {len(frames)}")
        rings = _unpack_single(_RINGS, frames[0], "rings")
        data = bytes(frames[1])
        usable = len(data) - len(data) % _POINT.size
        points = [tuple(p) for p in _POINT.iter_unpack(data[:usable])]
        scaling = _unpack_single(_SCALING, frames[2], "scaling")
        return cls(points, rings, scaling)


PointCloudStamped = Stamped[PointCloud]
PointCloudPtrStamped = Stamped[PointCloud]
PointCloudPtrStampedBuffer = ConcurrentRingBuffer[PointCloudPtrStamped]