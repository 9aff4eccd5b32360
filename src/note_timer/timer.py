"""Single-session timer and the background display ticker."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from .errors import TimerAlreadyRunningError, TimerNotRunningError
from .formatting import truncate_to_second
from .models import IDLE, Running, Session, TimerState

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class Timer:
    """Tracks at most one running session.

    The label naming the tracked note is captured when the timer starts and
    held until it stops, so switching notes mid-session does not move the
    session elsewhere.
    """

    def __init__(self, clock: Clock = datetime.now) -> None:
        self._clock = clock
        self._state: TimerState = IDLE

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return isinstance(self._state, Running)

    @property
    def label(self) -> Optional[str]:
        return self._state.label if isinstance(self._state, Running) else None

    def start(self, label: str) -> datetime:
        state = self._state
        if isinstance(state, Running):
            raise TimerAlreadyRunningError(state.label)
        started = truncate_to_second(self._clock())
        self._state = Running(start=started, label=label)
        logger.debug("Timer started at %s for %s", started, label)
        return started

    def stop(self) -> tuple[str, Session]:
        state = self._state
        if not isinstance(state, Running):
            raise TimerNotRunningError()
        # A clock that steps backwards yields an empty session rather than a negative one.
        ended = max(truncate_to_second(self._clock()), state.start)
        self._state = IDLE
        session = Session(start=state.start, end=ended)
        logger.debug(
            "Timer stopped for %s after %ss", state.label, session.duration_seconds
        )
        return state.label, session

    def toggle(self, label: str) -> Optional[tuple[str, Session]]:
        if self.is_running:
            return self.stop()
        self.start(label)
        return None

    def elapsed(self) -> int:
        state = self._state
        if not isinstance(state, Running):
            return 0
        seconds = (self._clock() - state.start).total_seconds()
        return max(int(seconds), 0)


class Ticker:
    """Invoke a callback at a fixed interval on a daemon thread."""

    def __init__(self, callback: Callable[[], None], interval: timedelta) -> None:
        self._callback = callback
        self._interval = interval
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

    def start(self) -> None:
        with self._lock:
            if self._thread and self._thread.is_alive():
                return
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run_loop, args=(stop_event,), daemon=True
            )
            self._thread = thread
            self._stop_event = stop_event
            thread.start()

    def stop(self) -> None:
        thread: Optional[threading.Thread] = None
        with self._lock:
            if not self._thread or not self._stop_event:
                return
            self._stop_event.set()
            thread = self._thread
            self._thread = None
            self._stop_event = None
        if thread is not threading.current_thread():
            thread.join(timeout=5)

    def is_running(self) -> bool:
        with self._lock:
            return bool(self._thread and self._thread.is_alive())

    def _run_loop(self, stop_event: threading.Event) -> None:
        interval = self._interval.total_seconds()
        while not stop_event.wait(interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Display tick failed; stopping ticker.")
                return
