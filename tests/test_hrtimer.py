from __future__ import annotations

from timerkit import HRTimer


class _NsClock:
    def __init__(self) -> None:
        self.now = 100

    def __call__(self) -> int:
        return self.now


def test_hrtimer_breakdown_and_format():
    clock = _NsClock()
    t = HRTimer("x", clock=clock)
    assert t.format() is None
    assert t.seconds() is None

    t.start()
    assert t.is_running() and not t.is_stopped()
    clock.now += 3_456_789_012
    t.stop()
    assert not t.is_running() and t.is_stopped()
    assert (t.seconds(), t.milliseconds(), t.microseconds(), t.nanoseconds()) == (3, 456, 789, 12)
    assert t.format() == "x: 3 s, 456 ms, 789 us, 12 ns"
    assert t.format("%ns/%us") == "12/789"


def test_hrtimer_start_and_stop_are_guarded():
    clock = _NsClock()
    t = HRTimer(clock=clock)
    t.stop()
    assert not t.is_stopped()

    t.start()
    clock.now += 500
    t.start()
    clock.now += 500
    t.stop()
    assert t.nanoseconds() == 0 and t.microseconds() == 1

    clock.now += 500
    t.stop()
    assert t.microseconds() == 1

    t.clear()
    assert not t.is_stopped() and not t.is_running()
    assert t.milliseconds() is None


def test_hrtimer_real_clock():
    t = HRTimer("real").start()
    sum(range(1000))
    t.stop()
    assert t.seconds() == 0
    assert t.format().startswith("real: 0 s")
