"""Per-user locations for files the note timer writes outside the vault."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs

_DIRS = PlatformDirs(appname="note-timer", appauthor=False)


def get_log_dir() -> Path:
    path = Path(_DIRS.user_log_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_log_path() -> Path:
    """Return the file used by ``--log-file``."""
    return get_log_dir() / "note-timer.log"
