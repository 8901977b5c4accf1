"""Integer points used by the fixed-point map and registration code."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

from fastsense.constants import MAP_RESOLUTION


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _round_half_away(value: float) -> int:
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def hls_abs(x):
    """Return the absolute value of x."""
    return -x if x < 0 else x


def hls_sqrt_approx(x: int) -> int:
    """Return round(sqrt(x)) as an integer."""
    return _round_half_away(math.sqrt(x))


def hls_sqrt_float(x: float) -> float:
    """Return sqrt(x)."""
    return math.sqrt(x)


def hls_sincos(angle: float) -> tuple[float, float]:
    """Return (sin(angle), cos(angle)) for an angle in radians."""
    return math.sin(angle), math.cos(angle)


def floor_divide(a, b: int) -> tuple[int, int, int]:
    """Return floor(a / b) for each component of the integer vector a."""
    return tuple(math.floor(_f32(_f32(float(v)) / b)) for v in a)


@dataclass(frozen=True)
class PointHW:
    """Integer 3D point in millimetres or map cells."""

    x: int = 0
    y: int = 0
    z: int = 0

    def __add__(self, rhs: PointHW) -> PointHW:
        return PointHW(self.x + rhs.x, self.y + rhs.y, self.z + rhs.z)

    def __sub__(self, rhs: PointHW) -> PointHW:
        return PointHW(self.x - rhs.x, self.y - rhs.y, self.z - rhs.z)

    def __mul__(self, rhs: int) -> PointHW:
        return PointHW(self.x * rhs, self.y * rhs, self.z * rhs)

    def __truediv__(self, rhs: int) -> PointHW:
        return PointHW(_trunc_div(self.x, rhs), _trunc_div(self.y, rhs), _trunc_div(self.z, rhs))

    def norm2(self) -> int:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> int:
        return hls_sqrt_approx(self.norm2())

    def abs(self) -> PointHW:
        return PointHW(hls_abs(self.x), hls_abs(self.y), hls_abs(self.z))

    def sign(self) -> PointHW:
        return PointHW(*(-1 if c < 0 else 1 for c in (self.x, self.y, self.z)))

    def to_map(self) -> PointHW:
        """Convert millimetres to map cells."""
        return self / MAP_RESOLUTION

    def to_mm(self) -> PointHW:
        """Convert map cells to the millimetre centre of the cell."""
        half = MAP_RESOLUTION // 2
        return PointHW(
            self.x * MAP_RESOLUTION + half,
            self.y * MAP_RESOLUTION + half,
            self.z * MAP_RESOLUTION + half,
        )


@dataclass(frozen=True)
class PointArith:
    """Wide integer 3D point for intermediate arithmetic."""

    x: int = 0
    y: int = 0
    z: int = 0

    def __add__(self, rhs: PointArith) -> PointArith:
        return PointArith(self.x + rhs.x, self.y + rhs.y, self.z + rhs.z)

    def __sub__(self, rhs: PointArith) -> PointArith:
        return PointArith(self.x - rhs.x, self.y - rhs.y, self.z - rhs.z)

    def __mul__(self, rhs: int) -> PointArith:
        return PointArith(self.x * rhs, self.y * rhs, self.z * rhs)

    def __truediv__(self, rhs: int) -> PointArith:
        return PointArith(_trunc_div(self.x, rhs), _trunc_div(self.y, rhs), _trunc_div(self.z, rhs))

    def norm2(self) -> int:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> int:
        return _round_half_away(math.sqrt(self.norm2()))

    def cross(self, rhs: PointArith) -> PointArith:
        return PointArith(
            self.y * rhs.z - self.z * rhs.y,
            self.z * rhs.x - self.x * rhs.z,
            self.x * rhs.y - self.y * rhs.x,
        )