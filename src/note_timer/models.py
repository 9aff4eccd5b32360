"""Domain models for timed sessions and their log entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class Session:
    """Represents one start-to-stop interval tracked by the timer."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(
                f"Session ends before it starts ({self.start} > {self.end})"
            )

    @property
    def duration_seconds(self) -> int:
        return int((self.end - self.start).total_seconds())


@dataclass(frozen=True, slots=True)
class LogEntry:
    """A single line of the session log.

    ``session`` is ``None`` when the timestamps could not be recovered from
    ``raw``; such entries are carried through verbatim.
    """

    raw: str
    session: Optional[Session] = None

    @property
    def is_malformed(self) -> bool:
        return self.session is None

    @property
    def duration_seconds(self) -> int:
        return self.session.duration_seconds if self.session else 0


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Running:
    start: datetime
    label: str


TimerState = Union[Idle, Running]

IDLE = Idle()
