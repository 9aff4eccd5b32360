"""Unit tests for the timer state machine and the display ticker."""

import threading
from datetime import datetime, timedelta

import pytest

from note_timer.errors import TimerAlreadyRunningError, TimerNotRunningError
from note_timer.models import Idle, Running
from note_timer.timer import Ticker, Timer


def test_start_then_stop_produces_session(clock):
    timer = Timer(clock)
    timer.start("Project plan")
    clock.advance(minutes=5, seconds=3)

    label, session = timer.stop()

    assert label == "Project plan"
    assert session.start == datetime(2024, 5, 1, 9, 0, 0)
    assert session.end == datetime(2024, 5, 1, 9, 5, 3)
    assert session.duration_seconds == 303
    assert isinstance(timer.state, Idle)


def test_start_while_running_is_rejected_without_state_change(clock):
    timer = Timer(clock)
    timer.start("First")
    clock.advance(seconds=10)

    with pytest.raises(TimerAlreadyRunningError):
        timer.start("Second")

    assert timer.state == Running(start=datetime(2024, 5, 1, 9, 0, 0), label="First")


def test_stop_twice_reports_second_call(clock):
    timer = Timer(clock)
    timer.start("Note")
    timer.stop()

    with pytest.raises(TimerNotRunningError):
        timer.stop()
    assert not timer.is_running


def test_label_is_captured_at_start(clock):
    timer = Timer(clock)
    timer.start("Original")
    clock.advance(seconds=30)
    label, _ = timer.stop()
    assert label == "Original"


def test_toggle_dispatches_on_state(clock):
    timer = Timer(clock)
    assert timer.toggle("Note") is None
    assert timer.is_running
    clock.advance(seconds=42)

    label, session = timer.toggle("Other")

    assert label == "Note"
    assert session.duration_seconds == 42
    assert not timer.is_running


def test_microseconds_are_dropped(clock):
    clock.now = datetime(2024, 5, 1, 9, 0, 0, 900000)
    timer = Timer(clock)
    timer.start("Note")
    clock.now = datetime(2024, 5, 1, 9, 0, 1, 100000)

    _, session = timer.stop()

    assert session.start.microsecond == 0
    assert session.end.microsecond == 0
    assert session.duration_seconds == 1


def test_elapsed_reads_without_changing_state(clock):
    timer = Timer(clock)
    assert timer.elapsed() == 0
    timer.start("Note")
    clock.advance(minutes=2)
    assert timer.elapsed() == 120
    assert timer.elapsed() == 120
    assert timer.is_running


def test_clock_stepping_backwards_gives_empty_session(clock):
    timer = Timer(clock)
    timer.start("Note")
    clock.advance(seconds=-30)
    _, session = timer.stop()
    assert session.duration_seconds == 0


def test_ticker_invokes_callback_until_stopped():
    fired = threading.Event()
    calls = []

    def _callback():
        calls.append(1)
        fired.set()

    ticker = Ticker(_callback, timedelta(milliseconds=10))
    ticker.start()
    assert fired.wait(timeout=2)
    ticker.stop()

    assert not ticker.is_running()
    count = len(calls)
    threading.Event().wait(0.05)
    assert len(calls) == count


def test_ticker_stop_without_start_is_noop():
    ticker = Ticker(lambda: None, timedelta(seconds=1))
    ticker.stop()
    assert not ticker.is_running()
