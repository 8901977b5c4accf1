"""TSDF map message: map geometry plus the cell values."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

from fastsense.msg.stamped import Stamped, ZMQConverter
from fastsense.tsdf_value import SIZE as _CELL_SIZE
from fastsense.tsdf_value import TSDFValue

_FLOAT = struct.Struct("<f")
_VEC3I = struct.Struct("<3i")

Vector3i = Tuple[int, int, int]


def _frame(frames: List[Any], index: int, fmt: struct.Struct, what: str):
    data = bytes(frames[index])
    if len(data) != fmt.size:
        raise ValueError(f"{what} frame must be {fmt.size} bytes, got {len(data)}")
    return fmt.unpack(data)


@dataclass
class TSDF(ZMQConverter):
    """Truncation distance, map size, position, shift offset, scaling and cells."""

    tau: float = 0.0
    size: Vector3i = (0, 0, 0)
    pos: Vector3i = (0, 0, 0)
    offset: Vector3i = (0, 0, 0)
    scaling: float = 1.0
    tsdf_data: List[TSDFValue] = field(default_factory=list)

    def to_frames(self) -> List[bytes]:
        """Encode as six frames: tau, size, pos, offset, scaling and the packed cells."""
        return [
            _FLOAT.pack(self.tau),
            _VEC3I.pack(*self.size),
            _VEC3I.pack(*self.pos),
            _VEC3I.pack(*self.offset),
            _FLOAT.pack(self.scaling),
            b"".join(value.to_bytes() for value in self.tsdf_data),
        ]

    @classmethod
    def from_frames(cls, frames: Sequence[Any]) -> TSDF:
        """Decode the six frames written by to_frames."""
        frames = list(frames)
        if len(frames) < 6:
            raise ValueError(f"TSDF needs 6 frames, got {len(frames)}")
        (tau,) = _frame(frames, 0, _FLOAT, "tau")
        size = _frame(frames, 1, _VEC3I, "size")
        pos = _frame(frames, 2, _VEC3I, "pos")
        offset = _frame(frames, 3, _VEC3I, "offset")
        (scaling,) = _frame(frames, 4, _FLOAT, "scaling")
        data = bytes(frames[5])
        usable = len(data) - len(data) % _CELL_SIZE
        cells = [
            TSDFValue.from_bytes(data[start:start + _CELL_SIZE])
            for start in range(0, usable, _CELL_SIZE)
        ]
        return cls(tau, tuple(size), tuple(pos), tuple(offset), scaling, cells)


TSDFStamped = Stamped[TSDF]