"""A single TSDF cell: a 16-bit value and a 16-bit weight packed into 32 bits."""

from __future__ import annotations

import struct
from dataclasses import dataclass

_CELL = struct.Struct("<hh")
_RAW = struct.Struct("<I")
_INT16_MIN = -(1 << 15)
_INT16_MAX = (1 << 15) - 1

#: Size of one encoded cell in bytes.
SIZE = _CELL.size


@dataclass(frozen=True)
class TSDFValue:
    """TSDF cell with signed 16-bit value and weight."""

    value: int = 0
    weight: int = 0

    def __post_init__(self) -> None:
        for name in ("value", "weight"):
            field = getattr(self, name)
            if not _INT16_MIN <= field <= _INT16_MAX:
                raise ValueError(f"{name} {field} does not fit in 16 bits")

    @classmethod
    def from_raw(cls, raw: int) -> TSDFValue:
        """Build a cell from its packed 32-bit representation."""
        if not 0 <= raw < (1 << 32):
            raise ValueError(f"raw value {raw} does not fit in 32 bits")
        return cls.from_bytes(_RAW.pack(raw))

    @property
    def raw(self) -> int:
        """Packed 32-bit representation: value in the low half, weight in the high half."""
        return _RAW.unpack(self.to_bytes())[0]

    def to_bytes(self) -> bytes:
        return _CELL.pack(self.value, self.weight)

    @classmethod
    def from_bytes(cls, data) -> TSDFValue:
        if len(data) != SIZE:
            raise ValueError(f"expected {SIZE} bytes, got {len(data)}")
        value, weight = _CELL.unpack(bytes(data))
        return cls(value, weight)