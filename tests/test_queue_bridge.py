import time

import zmq

from fastsense.comm.queue_bridge import QueueBridge
from fastsense.comm.sender import get_context
from fastsense.msg.imu import AngularVelocity, Imu, LinearAcceleration, MagneticField
from fastsense.msg.stamped import Stamped
from fastsense.process_thread import Runner
from fastsense.ring_buffer import ConcurrentRingBuffer


def _wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_values_are_forwarded():
    in_buf = ConcurrentRingBuffer(4)
    out_buf = ConcurrentRingBuffer(4)
    with QueueBridge(in_buf, out_buf, 0, send=False) as bridge:
        with Runner(bridge):
            in_buf.push(b"first")
            in_buf.push(b"second")
            assert out_buf.pop_nb(timeout_ms=5000) == b"first"
            assert out_buf.pop_nb(timeout_ms=5000) == b"second"


def test_forced_push_keeps_newest():
    in_buf = ConcurrentRingBuffer(4)
    out_buf = ConcurrentRingBuffer(1)
    in_buf.push(b"old")
    in_buf.push(b"new")
    with QueueBridge(in_buf, out_buf, 0, send=False, force=True) as bridge:
        with Runner(bridge):
            assert _wait_until(in_buf.empty)
        assert bridge.running is False
    assert len(out_buf) == 1
    assert out_buf.peek() == b"new"


def test_values_are_published():
    in_buf = ConcurrentRingBuffer(8)
    msg = Stamped(
        Imu(LinearAcceleration(1.0, 0.0, -1.0), AngularVelocity(0.25, 0.5, 1.0), MagneticField()),
        timestamp=11,
    )
    with QueueBridge(in_buf, None, 0, send=True) as bridge:
        sub = get_context().socket(zmq.SUB)
        try:
            sub.setsockopt(zmq.SUBSCRIBE, b"")
            sub.connect(f"tcp://127.0.0.1:{bridge.port}")
            frames = None
            with Runner(bridge):
                deadline = time.monotonic() + 5.0
                while frames is None and time.monotonic() < deadline:
                    in_buf.push_nb(msg, True)
                    if sub.poll(50, zmq.POLLIN):
                        frames = sub.recv_multipart()
        finally:
            sub.close(linger=0)
    assert frames == msg.to_frames()


def test_published_and_forwarded_together():
    in_buf = ConcurrentRingBuffer(4)
    out_buf = ConcurrentRingBuffer(4)
    with QueueBridge(in_buf, out_buf, 0) as bridge:
        with Runner(bridge):
            in_buf.push(b"both")
            assert out_buf.pop_nb(timeout_ms=5000) == b"both"
    assert in_buf.empty()