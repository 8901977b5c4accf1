import struct

import pytest

from fastsense.msg.stamped import Stamped
from fastsense.msg.transform import Quaternion, Transform


def test_default_is_identity():
    t = Transform()
    assert t.rotation == Quaternion(1.0, 0.0, 0.0, 0.0)
    assert t.translation == (0.0, 0.0, 0.0)
    assert t.scaling == 1.0


def test_rotation_sent_as_xyzw():
    t = Transform(Quaternion(w=4.0, x=1.0, y=2.0, z=3.0), (5.0, 6.0, 7.0), 0.5)
    frames = t.to_frames()
    assert frames[0] == struct.pack("<3f", 5.0, 6.0, 7.0)
    assert frames[1] == struct.pack("<4f", 1.0, 2.0, 3.0, 4.0)
    assert frames[2] == struct.pack("<f", 0.5)


def test_round_trip():
    t = Transform(Quaternion(0.5, -0.5, 0.5, -0.5), (1.5, -2.25, 3.0), 2.0)
    assert Transform.from_frames(t.to_frames()) == t


def test_stamped_round_trip():
    stamped = Stamped(Transform(Quaternion(0.0, 1.0, 0.0, 0.0), (1.0, 2.0, 3.0), 1.0), 99)
    assert Stamped.from_frames(stamped.to_frames(), Transform) == stamped


def test_short_rotation_frame():
    frames = Transform().to_frames()
    frames[1] = frames[1][:12]
    with pytest.raises(ValueError):
        Transform.from_frames(frames)


def test_missing_frames():
    with pytest.raises(ValueError):
        Transform.from_frames(Transform().to_frames()[:2])