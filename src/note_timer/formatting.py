"""Human-readable durations and the timestamp format used in session logs."""

from __future__ import annotations

import re
from datetime import datetime

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S"

TIMESTAMP_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")


def format_duration(seconds: float) -> str:
    """Return the shortest label for a duration, e.g. ``1h23m`` or ``4m5s``.

    Seconds are dropped once the duration reaches an hour. The same policy is
    used for the live indicator and for everything written to a note.
    """
    if seconds < 0:
        raise ValueError(f"duration must be non-negative, got {seconds}")
    total_seconds = int(seconds)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0 and minutes > 0:
        return f"{hours}h{minutes}m"
    if hours > 0:
        return f"{hours}h"
    if minutes > 0 and secs > 0:
        return f"{minutes}m{secs}s"
    if minutes > 0:
        return f"{minutes}m"
    return f"{secs}s"


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FMT)


def parse_timestamp(value: str) -> datetime:
    """Parse ``YYYY-MM-DD HH:MM:SS``; raises ``ValueError`` on bad input."""
    return datetime.strptime(value.strip(), TIMESTAMP_FMT)


def truncate_to_second(value: datetime) -> datetime:
    return value.replace(microsecond=0)
