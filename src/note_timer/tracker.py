"""Wire the timer, the log merger and the front matter editor to a vault."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .config import TrackerSettings
from .errors import DocumentNotFoundError, TimerStateError
from .formatting import format_duration
from .frontmatter import MetadataBlock
from .models import Session
from .normalization import normalize_label
from .session_log import merge_log
from .timer import Clock, Ticker, Timer
from .vault import Vault

logger = logging.getLogger(__name__)

IDLE_INDICATOR = "🕑"
UNKNOWN_LABEL = "Unknown note"


@dataclass(slots=True)
class DocumentUpdate:
    """A note's new text together with what was derived from its log."""

    text: str
    total_seconds: int
    warnings: list[str] = field(default_factory=list)


def record_session(
    text: str, session: Optional[Session], settings: Optional[TrackerSettings] = None
) -> DocumentUpdate:
    """Merge ``session`` into the note text and rewrite the owned fields.

    With ``session=None`` the log is re-serialised and the total recomputed
    from the log alone.
    """
    settings = settings or TrackerSettings()
    block = MetadataBlock.parse(text)
    existing = block.get_block_lines(settings.log_key)
    result = merge_log(
        "\n".join(existing) if existing else None, session, marker=settings.marker
    )
    block.set_value(settings.duration_key, result.total_label)
    block.set_block(settings.log_key, result.lines, indent=settings.indent)
    return DocumentUpdate(
        text=block.render(),
        total_seconds=result.total_seconds,
        warnings=result.warnings,
    )


def recount(text: str, settings: Optional[TrackerSettings] = None) -> DocumentUpdate:
    return record_session(text, None, settings)


class TimeTracker:
    """Start and stop timing notes, reporting through host callbacks.

    ``notify`` receives one short status message per action; ``indicator``
    receives the idle/running indicator text, once a second while running.
    """

    def __init__(
        self,
        vault: Vault,
        settings: Optional[TrackerSettings] = None,
        *,
        notify: Callable[[str], None] = print,
        indicator: Optional[Callable[[str], None]] = None,
        clock: Clock = datetime.now,
    ) -> None:
        self.vault = vault
        self.settings = settings or TrackerSettings()
        self.timer = Timer(clock)
        self.total_seconds = 0
        self._notify = notify
        self._indicator = indicator
        self._lock = threading.Lock()
        self._ticker = Ticker(self._tick, self.settings.tick_interval)

    def start_timer(self, label: Optional[str]) -> bool:
        label = normalize_label(label) or UNKNOWN_LABEL
        with self._lock:
            try:
                self.timer.start(label)
            except TimerStateError:
                self._notify("Timer is already running.")
                return False
        if self._indicator is not None:
            self._ticker.start()
        self._show_indicator()
        logger.info("Timer started for %s", label)
        self._notify(f"Timer started for {label}.")
        return True

    def stop_timer(self) -> Optional[DocumentUpdate]:
        with self._lock:
            try:
                label, session = self.timer.stop()
            except TimerStateError:
                self._notify("No timer is running.")
                return None
        self._ticker.stop()
        self._show_indicator()

        try:
            update = self._write_session(label, session)
        except DocumentNotFoundError as exc:
            logger.warning("Session for %s not written: %s", label, exc)
            self._notify(f"Could not find the note where the timer started ({label}).")
            return None
        except (OSError, UnicodeError) as exc:
            logger.exception("Session for %s not written", label)
            self._notify(f"Could not write the session to {label}: {exc}")
            return None

        self.total_seconds += session.duration_seconds
        for warning in update.warnings:
            logger.warning("%s: %s", label, warning)
        self._notify(
            f"Timer stopped for {label}. "
            f"Time spent: {format_duration(session.duration_seconds)}"
        )
        return update

    def toggle_timer(self, label: Optional[str]) -> None:
        if self.timer.is_running:
            self.stop_timer()
        else:
            self.start_timer(label)

    def indicator_text(self) -> str:
        with self._lock:
            label = self.timer.label
            if label is None:
                return IDLE_INDICATOR
            elapsed = format_duration(self.timer.elapsed())
        return f"⏸️ {elapsed} - {label}"

    def shutdown(self) -> None:
        """Cancel the display tick; a running session is discarded."""
        self._ticker.stop()
        if self.timer.is_running:
            logger.info("Shutting down with a running timer for %s", self.timer.label)

    def _write_session(self, label: str, session: Session) -> DocumentUpdate:
        path: Path = self.vault.resolve(label)
        update = record_session(self.vault.read(path), session, self.settings)
        self.vault.write(path, update.text)
        logger.info(
            "Logged %ss to %s (total %s)",
            session.duration_seconds,
            path,
            format_duration(update.total_seconds),
        )
        return update

    def _tick(self) -> None:
        self._show_indicator()

    def _show_indicator(self) -> None:
        if self._indicator is not None:
            self._indicator(self.indicator_text())
