"""IMU readings: linear acceleration, angular velocity and magnetic field."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Sequence, Union

from fastsense.constants import G
from fastsense.msg.stamped import Stamped, ZMQConverter
from fastsense.ring_buffer import ConcurrentRingBuffer

DEGREES_TO_RADIANS = math.pi / 180.0

#: Value the IMU driver reports for an unknown reading.
PUNK_DBL = 1e300

_FLOAT = struct.Struct("<f")
_IMU = struct.Struct("<9f")


def _f32(value: float) -> float:
    if math.isnan(value):
        return value
    try:
        return _FLOAT.unpack(_FLOAT.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


_G32 = _f32(G)


def _div(a: float, b: float) -> float:
    """IEEE division: division by zero gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


@dataclass(frozen=True)
class Vector3:
    """Three single-precision components."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        for name in ("x", "y", "z"):
            object.__setattr__(self, name, _f32(float(getattr(self, name))))

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __add__(self, other: Vector3):
        return type(self)(*(a + b for a, b in zip(self, other)))

    def __sub__(self, other: Vector3):
        return type(self)(*(a - b for a, b in zip(self, other)))

    def __truediv__(self, other: Union[Vector3, float]):
        if isinstance(other, Vector3):
            return type(self)(*(_div(a, b) for a, b in zip(self, other)))
        divisor = _f32(float(other))
        return type(self)(*(_div(a, divisor) for a in self))


class LinearAcceleration(Vector3):
    """Linear acceleration in m/s^2."""

    @classmethod
    def from_phidget(cls, acceleration: Sequence[float]) -> LinearAcceleration:
        """Convert a driver reading in g, with inverted sign, to m/s^2."""
        return cls(*(-a * _G32 for a in acceleration[:3]))


class AngularVelocity(Vector3):
    """Angular velocity in rad/s."""

    @classmethod
    def from_phidget(cls, angular_rate: Sequence[float]) -> AngularVelocity:
        """Convert a driver reading in deg/s to rad/s."""
        return cls(*(r * DEGREES_TO_RADIANS for r in angular_rate[:3]))


class MagneticField(Vector3):
    """Magnetic field in tesla."""

    @classmethod
    def from_phidget(cls, magnetic_field: Sequence[float]) -> MagneticField:
        """Convert a driver reading in gauss to tesla; unknown readings become NaN."""
        if magnetic_field[0] != PUNK_DBL:
            return cls(*(m * 1e-4 for m in magnetic_field[:3]))
        return cls(math.nan, math.nan, math.nan)


def _fmt(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True)
class Imu(ZMQConverter):
    """One IMU reading."""

    acc: LinearAcceleration = field(default_factory=LinearAcceleration)
    ang: AngularVelocity = field(default_factory=AngularVelocity)
    mag: MagneticField = field(default_factory=MagneticField)

    @classmethod
    def from_phidget(
        cls,
        acceleration: Sequence[float],
        angular_rate: Sequence[float],
        magnetic_field: Sequence[float],
    ) -> Imu:
        """Build a reading from raw driver arrays."""
        return cls(
            LinearAcceleration.from_phidget(acceleration),
            AngularVelocity.from_phidget(angular_rate),
            MagneticField.from_phidget(magnetic_field),
        )

    def __add__(self, other: Imu) -> Imu:
        return Imu(self.acc + other.acc, self.ang + other.ang, self.mag + other.mag)

    def __sub__(self, other: Imu) -> Imu:
        return Imu(self.acc - other.acc, self.ang - other.ang, self.mag - other.mag)

    def __truediv__(self, other: Union[Imu, float]) -> Imu:
        if isinstance(other, Imu):
            return Imu(self.acc / other.acc, self.ang / other.ang, self.mag / other.mag)
        return Imu(self.acc / other, self.ang / other, self.mag / other)

    def __str__(self) -> str:
        lines = []
        for title, vec in (("acc", self.acc), ("ang", self.ang), ("mag", self.mag)):
            lines.append(f"-- {title} --")
            lines.extend(_fmt(v) for v in vec)
        return "\n".join(lines) + "\n"

    def to_frames(self) -> List[bytes]:
        """Encode as one frame of nine little-endian floats."""
        return [_IMU.pack(*self.acc, *self.ang, *self.mag)]

    @classmethod
    def from_frames(cls, frames: Sequence[Any]) -> Imu:
        """Decode from a frame of nine little-endian floats."""
        if not frames:
            raise ValueError("message has no IMU frame")
        data = bytes(frames[0])
        if len(data) != _IMU.size:
            raise ValueError(f"IMU frame must be {_IMU.size} bytes, got {len(data)}")
        values = _IMU.unpack(data)
        return cls(
            LinearAcceleration(*values[0:3]),
            AngularVelocity(*values[3:6]),
            MagneticField(*values[6:9]),
        )


ImuStamped = Stamped[Imu]
ImuStampedBuffer = ConcurrentRingBuffer[ImuStamped]