"""Parse, merge and re-serialise the session log stored in a note."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .formatting import (
    TIMESTAMP_PATTERN,
    format_duration,
    format_timestamp,
    parse_timestamp,
)
from .models import LogEntry, Session

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "⏱️"

_ENTRY_PATTERN = re.compile(
    rf"(?P<start>{TIMESTAMP_PATTERN.pattern})\s+-\s+(?P<end>{TIMESTAMP_PATTERN.pattern})"
)
_LIST_ITEM_PREFIX = re.compile(r"^-\s+")


@dataclass(slots=True)
class MergeResult:
    """Outcome of merging a session into an existing log."""

    lines: list[str]
    total_seconds: int
    warnings: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def total_label(self) -> str:
        return format_duration(self.total_seconds)


def render_entry(session: Session, marker: str = DEFAULT_MARKER) -> str:
    """Render one session as a single log line."""
    return (
        f"{marker} {format_timestamp(session.start)} - "
        f"{format_timestamp(session.end)} ({format_duration(session.duration_seconds)})"
    )


def parse_entries(text: Optional[str]) -> list[LogEntry]:
    """Split log text into entries, skipping blank lines.

    Besides the single-line form written by :func:`render_entry`, two older
    shapes are accepted: YAML sequence items (``- ...``) and a start
    timestamp and an end timestamp on consecutive lines.
    """
    if not text:
        return []
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    entries: list[LogEntry] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        match = _ENTRY_PATTERN.search(line)
        if match:
            entries.append(_build_entry(line, match.group("start"), match.group("end")))
            index += 1
            continue

        stamps = TIMESTAMP_PATTERN.findall(line)
        if len(stamps) == 1 and index + 1 < len(lines):
            following = lines[index + 1]
            next_stamps = TIMESTAMP_PATTERN.findall(following)
            if len(next_stamps) == 1 and not _ENTRY_PATTERN.search(following):
                entries.append(
                    _build_entry(f"{line} {following}", stamps[0], next_stamps[0])
                )
                index += 2
                continue

        entries.append(LogEntry(raw=_LIST_ITEM_PREFIX.sub("", line)))
        index += 1
    return entries


def _build_entry(raw: str, start_text: str, end_text: str) -> LogEntry:
    try:
        session = Session(start=parse_timestamp(start_text), end=parse_timestamp(end_text))
    except ValueError:
        return LogEntry(raw=_LIST_ITEM_PREFIX.sub("", raw))
    return LogEntry(raw=raw, session=session)


def total_seconds(entries: Iterable[LogEntry]) -> int:
    return sum(entry.duration_seconds for entry in entries)


def merge_log(
    existing: Optional[str],
    session: Optional[Session] = None,
    *,
    marker: str = DEFAULT_MARKER,
) -> MergeResult:
    """Insert ``session`` into ``existing`` and recompute the total.

    Parseable entries are de-duplicated on their timestamps and ordered
    newest first; entries that cannot be parsed are kept verbatim after
    them and reported in ``warnings``. The total is always derived from the
    entries, never from a previously stored value.
    """
    entries = parse_entries(existing)
    if session is not None:
        entries.insert(0, LogEntry(raw=render_entry(session, marker), session=session))

    parsed: list[tuple[LogEntry, Session]] = []
    malformed: list[LogEntry] = []
    seen: set[tuple] = set()
    for entry in entries:
        if entry.session is None:
            malformed.append(entry)
            continue
        key = (entry.session.start, entry.session.end)
        if key in seen:
            logger.debug("Dropping duplicate log entry %r", entry.raw)
            continue
        seen.add(key)
        parsed.append((entry, entry.session))
    parsed.sort(key=lambda pair: pair[1].start, reverse=True)

    warnings: list[str] = []
    for entry in malformed:
        logger.warning("Skipping unparseable log entry: %r", entry.raw)
        warnings.append(f"Unparseable log entry: {entry.raw}")

    lines = [render_entry(session, marker) for _, session in parsed]
    lines.extend(entry.raw for entry in malformed)
    return MergeResult(
        lines=lines,
        total_seconds=total_seconds(entry for entry, _ in parsed),
        warnings=warnings,
    )
