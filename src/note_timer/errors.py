"""Exceptions raised by the note timer."""

from __future__ import annotations


class NoteTimerError(Exception):
    """Base class for recoverable note timer errors."""


class TimerStateError(NoteTimerError):
    """Raised when an action does not fit the current timer state."""


class TimerAlreadyRunningError(TimerStateError):
    def __init__(self, label: str) -> None:
        super().__init__(f"Timer is already running for {label}.")
        self.label = label


class TimerNotRunningError(TimerStateError):
    def __init__(self) -> None:
        super().__init__("No timer is running.")


class DocumentNotFoundError(NoteTimerError):
    """Raised when the note a session belongs to cannot be located."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Could not find note {label!r}.")
        self.label = label
