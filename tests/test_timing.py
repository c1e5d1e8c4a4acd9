import pytest

from coremark.timing import (
    NSECS_PER_SEC,
    TICKS_PER_SEC,
    Timer,
    time_in_secs,
)


def _fake_clock(*values):
    readings = iter(values)
    return lambda: next(readings)


def test_time_in_secs_of_one_second_of_ticks():
    assert time_in_secs(TICKS_PER_SEC) == 1.0


def test_time_in_secs_of_zero():
    assert time_in_secs(0) == 0.0


def test_ticks_per_second_is_milliseconds():
    assert time_in_secs(1000) == 1.0
    timer = Timer(clock=_fake_clock(0, 1_000_000))
    timer.start()
    timer.stop()
    assert timer.ticks() == 1


def test_whole_seconds_elapsed():
    timer = Timer(clock=_fake_clock(5 * NSECS_PER_SEC, 7 * NSECS_PER_SEC))
    timer.start()
    timer.stop()
    assert timer.ticks() == 2 * TICKS_PER_SEC
    assert time_in_secs(timer.ticks()) == 2.0


def test_nanosecond_part_truncates_toward_zero():
    start = NSECS_PER_SEC - 1
    stop = NSECS_PER_SEC
    timer = Timer(clock=_fake_clock(start, stop))
    timer.start()
    timer.stop()
    assert timer.ticks() == 1


def test_ticks_before_start_raises():
    timer = Timer(clock=_fake_clock(0, 1))
    with pytest.raises(RuntimeError):
        timer.ticks()


def test_stop_before_start_raises():
    timer = Timer(clock=_fake_clock(0))
    with pytest.raises(RuntimeError):
        timer.stop()


def test_ticks_before_stop_raises():
    timer = Timer(clock=_fake_clock(0, 1))
    timer.start()
    with pytest.raises(RuntimeError):
        timer.ticks()


def test_restart_discards_previous_stop():
    timer = Timer(clock=_fake_clock(0, NSECS_PER_SEC, 3 * NSECS_PER_SEC))
    timer.start()
    timer.stop()
    timer.start()
    with pytest.raises(RuntimeError):
        timer.ticks()


def test_context_manager_times_block():
    timer = Timer(clock=_fake_clock(NSECS_PER_SEC, 4 * NSECS_PER_SEC))
    with timer as entered:
        assert entered is timer
    assert timer.ticks() == 3 * TICKS_PER_SEC


def test_real_clock_is_non_negative():
    timer = Timer()
    timer.start()
    timer.stop()
    assert timer.ticks() >= 0
    assert time_in_secs(timer.ticks()) >= 0.0