"""Tests for per-user file locations."""

from pathlib import Path

from note_timer import paths


def test_log_path_lives_in_created_log_dir(tmp_path, monkeypatch):
    class _Dirs:
        user_log_path = tmp_path / "logs"

    monkeypatch.setattr(paths, "_DIRS", _Dirs())

    log_path = paths.get_log_path()

    assert log_path == Path(tmp_path / "logs" / "note-timer.log")
    assert log_path.parent.is_dir()
