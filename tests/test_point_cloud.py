import struct

import pytest

from fastsense.msg.point_cloud import PointCloud
from fastsense.msg.stamped import Stamped


def test_defaults():
    cloud = PointCloud()
    assert cloud.points == []
    assert cloud.rings == 0
    assert cloud.scaling == 1.0


def test_wire_layout():
    cloud = PointCloud([(1, 2, 3), (-4, 5, -6)], rings=16, scaling=0.5)
    frames = cloud.to_frames()
    assert frames == [
        struct.pack("<H", 16),
        struct.pack("<3i", 1, 2, 3) + struct.pack("<3i", -4, 5, -6),
        struct.pack("<f", 0.5),
    ]


def test_round_trip():
    cloud = PointCloud([(10, -20, 30), (0, 0, 1), (7, 8, 9)], rings=3, scaling=2.0)
    assert PointCloud.from_frames(cloud.to_frames()) == cloud


def test_empty_round_trip():
    cloud = PointCloud()
    assert PointCloud.from_frames(cloud.to_frames()) == cloud


def test_partial_point_bytes_are_dropped():
    frames = PointCloud([(1, 2, 3)], rings=1).to_frames()
    frames[1] += b"\x00\x01"
    decoded = PointCloud.from_frames(frames)
    assert decoded.points == [(1, 2, 3)]


def test_bad_rings_frame():
    frames = PointCloud([(1, 2, 3)], rings=1).to_frames()
    frames[0] = b"\x01"
    with pytest.raises(ValueError):
        PointCloud.from_frames(frames)


def test_too_few_frames():
    with pytest.raises(ValueError):
        PointCloud.from_frames([struct.pack("<H", 1)])


def test_stamped_round_trip():
    stamped = Stamped(PointCloud([(1, 1, 1), (2, 2, 2)], rings=2, scaling=0.25), 12345)
    decoded = Stamped.from_frames(stamped.to_frames(), PointCloud)
    assert decoded == stamped