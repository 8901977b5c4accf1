import time

from fastsense.constants import now


def test_now_lies_between_surrounding_clock_reads():
    before = time.time_ns()
    stamp = now()
    after = time.time_ns()
    assert before <= stamp <= after


def test_now_is_non_decreasing():
    first = now()
    second = now()
    assert second >= first


def test_now_is_integer_nanoseconds():
    stamp = now()
    assert isinstance(stamp, int)
    assert abs(stamp / 1e9 - time.time()) < 5.0