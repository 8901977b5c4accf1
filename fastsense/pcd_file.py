"""Reading and writing point clouds in the PCD file format, one list per ring."""

from __future__ import annotations

import os
import struct
from typing import List, Sequence, Tuple, Union

_RECORD = struct.Struct("<fffh")
_FLOAT = struct.Struct("<f")
_HEADER_LINES = 10
_WIDTH_LINE = 6

Point = Tuple[float, float, float]


class PCDFormatError(ValueError):
    """Raised when a PCD file does not have the expected layout."""


def _f32(value: float) -> float:
    return _FLOAT.unpack(_FLOAT.pack(value))[0]


def _header(width: int, binary: bool) -> str:
    return (
        "# .PCD v.7 - Point Cloud Data file format\n"
        "VERSION .7\n"
        "FIELDS x y z ring\n"
        "SIZE 4 4 4 2\n"
        "TYPE F F F I\n"
        "COUNT 1 1 1 1  \n"
        f"WIDTH {width}\n"
        "HEIGHT 1\n"
        "VIEWPOINT 0 0 0 1 0 0 0\n"
        f"POINTS {width}\n"
        f"DATA {'binary' if binary else 'ascii'}\n"
    )


class PCDFile:
    """A PCD file holding x, y, z and ring number of each point."""

    def __init__(self, file_name: Union[str, os.PathLike]) -> None:
        self.name = file_name

    def write_points(self, points: Sequence[Sequence[Sequence[float]]], binary: bool = False) -> None:
        """Write the points; points[i] holds the points of ring i."""
        data = bytearray()
        width = 0
        for ring_number, ring in enumerate(points):
            for point in ring:
                x, y, z = (_f32(float(c)) for c in point[:3])
                if binary:
                    data += _RECORD.pack(x, y, z, ring_number)
                else:
                    data += f"{x:g} {y:g} {z:g} {ring_number}\n".encode("ascii")
                width += 1

        with open(self.name, "wb") as file:
            file.write(_header(width, binary).encode("ascii"))
            file.write(data)

    def read_points(self) -> Tuple[List[List[Point]], int]:
        """Read the file; return the points grouped by ring and the width from the header."""
        with open(self.name, "rb") as file:
            line = ""
            number_of_points = 0
            for header_line in range(1, _HEADER_LINES + 1):
                while True:
                    line = file.readline().decode("ascii", errors="replace").rstrip("\n")
                    if not line:
                        raise PCDFormatError(
                            f"PCD header has the wrong format at header line {header_line}"
                        )
                    if not line.startswith("#"):
                        break
                if header_line == _WIDTH_LINE:
                    try:
                        number_of_points = int(line.rsplit(" ", 1)[-1])
                    except ValueError as exc:
                        raise PCDFormatError(f"invalid point count in {line!r}") from exc
            binary = "binary" in line
            body = file.read()

        records = self._binary_records(body) if binary else self._ascii_records(body)
        rings: List[List[Point]] = []
        for x, y, z, ring in records:
            if ring < 0:
                raise PCDFormatError(f"negative ring number {ring}")
            while ring >= len(rings):
                rings.append([])
            rings[ring].append((x, y, z))
        return rings, number_of_points

    @staticmethod
    def _binary_records(body: bytes):
        for start in range(0, len(body), _RECORD.size):
            chunk = body[start:start + _RECORD.size]
            if len(chunk) < 4:
                return
            if len(chunk) < 8:
                raise PCDFormatError("y component could not be read")
            if len(chunk) < 12:
                raise PCDFormatError("z component could not be read")
            if len(chunk) < _RECORD.size:
                raise PCDFormatError("ring component could not be read")
            yield _RECORD.unpack(chunk)

    @staticmethod
    def _ascii_records(body: bytes):
        tokens = iter(body.decode("ascii", errors="replace").split())

        def component(name: str, convert):
            token = next(tokens, None)
            try:
                return convert(token)
            except (TypeError, ValueError) as exc:
                raise PCDFormatError(f"{name} component could not be read") from exc

        while True:
            token = next(tokens, None)
            if token is None:
                return
            try:
                x = _f32(float(token))
            except ValueError:
                return
            y = component("y", lambda t: _f32(float(t)))
            z = component("z", lambda t: _f32(float(t)))
            ring = component("ring", int)
            yield x, y, z, ring