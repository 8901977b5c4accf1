import threading
import time

import pytest

from fastsense.ring_buffer import BufferEmpty, ConcurrentRingBuffer


def test_fifo_order():
    buf = ConcurrentRingBuffer(4)
    for item in ["a", "b", "c"]:
        buf.push(item)
    assert [buf.pop(), buf.pop(), buf.pop()] == ["a", "b", "c"]
    assert buf.empty()


def test_size_and_capacity():
    buf = ConcurrentRingBuffer(3)
    assert buf.capacity() == 3
    assert len(buf) == 0
    buf.push_nb(1)
    buf.push_nb(2)
    assert len(buf) == 2
    assert not buf.full()
    buf.push_nb(3)
    assert buf.full()


def test_invalid_size():
    with pytest.raises(ValueError):
        ConcurrentRingBuffer(0)


def test_push_nb_fails_when_full():
    buf = ConcurrentRingBuffer(2)
    assert buf.push_nb(1) is True
    assert buf.push_nb(2) is True
    assert buf.push_nb(3) is False
    assert [buf.pop(), buf.pop()] == [1, 2]


def test_push_nb_force_drops_oldest():
    buf = ConcurrentRingBuffer(2)
    buf.push_nb(1)
    buf.push_nb(2)
    assert buf.push_nb(3, force=True) is True
    assert len(buf) == 2
    assert [buf.pop(), buf.pop()] == [2, 3]


def test_pop_nb_empty_raises():
    buf = ConcurrentRingBuffer(2)
    with pytest.raises(BufferEmpty):
        buf.pop_nb()


def test_pop_nb_waits_for_timeout():
    buf = ConcurrentRingBuffer(2)
    start = time.monotonic()
    with pytest.raises(BufferEmpty):
        buf.pop_nb(timeout_ms=50)
    assert time.monotonic() - start >= 0.04


def test_pop_nb_receives_item_pushed_during_wait():
    buf = ConcurrentRingBuffer(2)
    timer = threading.Timer(0.05, buf.push, args=("late",))
    timer.start()
    try:
        assert buf.pop_nb(timeout_ms=2000) == "late"
    finally:
        timer.join()


def test_blocking_pop_wakes_on_push():
    buf = ConcurrentRingBuffer(1)
    result = []
    worker = threading.Thread(target=lambda: result.append(buf.pop()))
    worker.start()
    time.sleep(0.05)
    buf.push("x")
    worker.join(timeout=2)
    assert not worker.is_alive()
    assert result == ["x"]


def test_blocking_push_waits_for_room():
    buf = ConcurrentRingBuffer(1)
    buf.push("first")
    worker = threading.Thread(target=buf.push, args=("second",))
    worker.start()
    time.sleep(0.05)
    assert worker.is_alive()
    assert buf.pop() == "first"
    worker.join(timeout=2)
    assert not worker.is_alive()
    assert buf.pop() == "second"


def test_blocking_push_released_by_clear():
    buf = ConcurrentRingBuffer(1)
    buf.push("old")
    worker = threading.Thread(target=buf.push, args=("new",))
    worker.start()
    time.sleep(0.05)
    buf.clear()
    worker.join(timeout=2)
    assert not worker.is_alive()
    assert buf.pop_nb() == "new"


def test_pop_nb_if_predicate():
    buf = ConcurrentRingBuffer(3)
    buf.push(5)
    buf.push(6)
    with pytest.raises(BufferEmpty):
        buf.pop_nb_if(lambda v: v > 5)
    assert len(buf) == 2
    assert buf.pop_nb_if(lambda v: v == 5) == 5
    assert buf.pop_if(lambda v: v == 6) == 6
    with pytest.raises(BufferEmpty):
        buf.pop_nb_if(lambda v: True, timeout_ms=10)


def test_pop_if_rejection_keeps_element():
    buf = ConcurrentRingBuffer(2)
    buf.push("keep")
    with pytest.raises(BufferEmpty):
        buf.pop_if(lambda v: False)
    assert buf.pop() == "keep"


def test_peek_does_not_remove():
    buf = ConcurrentRingBuffer(2)
    buf.push("a")
    buf.push("b")
    assert buf.peek() == "a"
    assert buf.peek_nb() == "a"
    assert len(buf) == 2
    assert buf.pop() == "a"


def test_peek_nb_empty_raises():
    buf = ConcurrentRingBuffer(2)
    with pytest.raises(BufferEmpty):
        buf.peek_nb(timeout_ms=10)


def test_clear_empties_buffer():
    buf = ConcurrentRingBuffer(3)
    buf.push(1)
    buf.push(2)
    buf.clear()
    assert buf.empty()
    assert len(buf) == 0
    with pytest.raises(BufferEmpty):
        buf.pop_nb()