"""Configuration models and helpers for the note timer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from .session_log import DEFAULT_MARKER


@dataclass(slots=True)
class TrackerSettings:
    """Runtime configuration for the timer and the front matter it writes."""

    duration_key: str = "time_spent"
    log_key: str = "time_log"
    indent: str = "  "
    marker: str = DEFAULT_MARKER
    tick_interval: timedelta = timedelta(seconds=1)
    note_suffix: str = ".md"

    @classmethod
    def from_options(
        cls,
        duration_key: str | None = None,
        log_key: str | None = None,
        tick_seconds: float | None = None,
    ) -> "TrackerSettings":
        settings = cls()
        if duration_key:
            settings.duration_key = duration_key.strip()
        if log_key:
            settings.log_key = log_key.strip()
        if tick_seconds is not None:
            settings.tick_interval = timedelta(seconds=max(tick_seconds, 0.1))
        if settings.duration_key == settings.log_key:
            raise ValueError("duration key and log key must differ")
        return settings
