import time

import pytest

from fastsense.comm.buffered_receiver import (
    BufferedImuStampedReceiver,
    BufferedPclStampedReceiver,
    BufferedReceiver,
)
from fastsense.comm.sender import Sender
from fastsense.msg.imu import AngularVelocity, Imu, LinearAcceleration, MagneticField
from fastsense.msg.point_cloud import PointCloud
from fastsense.msg.stamped import Stamped
from fastsense.process_thread import Runner
from fastsense.ring_buffer import ConcurrentRingBuffer


@pytest.fixture
def sender():
    s = Sender(0)
    yield s
    s.close()


def _feed_until_buffered(sender, buffer, msg, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline and buffer.empty():
        sender.send(msg)
        time.sleep(0.02)
    return not buffer.empty()


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        BufferedReceiver("127.0.0.1", 5555, 10, ConcurrentRingBuffer(1), bytes)


def test_receive_without_data(sender):
    buffer = ConcurrentRingBuffer(4)
    with BufferedImuStampedReceiver("127.0.0.1", sender.port, 10, buffer) as receiver:
        assert receiver.receive() is False
    assert buffer.empty()


def test_imu_messages_are_buffered(sender):
    buffer = ConcurrentRingBuffer(16)
    msg = Stamped(
        Imu(LinearAcceleration(1.0, 2.0, 3.0), AngularVelocity(0.5, 0.5, 0.5), MagneticField(1.0, 0.0, 0.0)),
        timestamp=5,
    )
    receiver = BufferedImuStampedReceiver("127.0.0.1", sender.port, 20, buffer)
    try:
        with Runner(receiver):
            assert _feed_until_buffered(sender, buffer, msg)
        assert receiver.running is False
    finally:
        receiver.close()
    assert buffer.pop() == msg


def test_point_clouds_are_buffered(sender):
    buffer = ConcurrentRingBuffer(16)
    msg = Stamped(PointCloud([(10, 20, 30)], rings=1, scaling=2.0), timestamp=8)
    receiver = BufferedPclStampedReceiver("127.0.0.1", sender.port, 20, buffer)
    try:
        with Runner(receiver):
            assert _feed_until_buffered(sender, buffer, msg)
    finally:
        receiver.close()
    received = buffer.pop()
    assert received.data == msg.data
    assert received.timestamp == msg.timestamp


def test_direct_receive_pushes_into_buffer(sender):
    buffer = ConcurrentRingBuffer(4)
    msg = Stamped(Imu(), timestamp=3)
    with BufferedImuStampedReceiver("127.0.0.1", sender.port, 50, buffer) as receiver:
        deadline = time.monotonic() + 5.0
        received = False
        while not received and time.monotonic() < deadline:
            sender.send(msg)
            received = receiver.receive()
    assert received is True
    assert buffer.peek() == msg