"""Command-line interface for the note timer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .config import TrackerSettings
from .errors import DocumentNotFoundError
from .formatting import format_duration, parse_timestamp
from .models import Session
from .paths import get_log_path
from .tracker import TimeTracker, record_session, recount as recount_document
from .vault import Vault

app = typer.Typer(help="Track time spent on Markdown notes.")

VaultOption = typer.Option(
    Path("."),
    "--vault",
    path_type=Path,
    file_okay=False,
    exists=True,
    help="Directory holding the notes.",
)


@app.callback(no_args_is_help=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    log_file: bool = typer.Option(
        False, "--log-file", help="Also write logs to the per-user data directory."
    ),
    duration_key: Optional[str] = typer.Option(
        None, "--duration-key", help="Front matter key holding the total time."
    ),
    log_key: Optional[str] = typer.Option(
        None, "--log-key", help="Front matter key holding the session log."
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    if log_file:
        handler = logging.FileHandler(get_log_path(), encoding="utf-8")
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        logging.getLogger().addHandler(handler)
    try:
        ctx.obj = TrackerSettings.from_options(duration_key=duration_key, log_key=log_key)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def track(
    ctx: typer.Context,
    note: str = typer.Argument(..., help="Note name, path or [[link]] to time."),
    vault_dir: Path = VaultOption,
) -> None:
    """Time a single session; press Enter (or Ctrl-C) to stop and log it."""
    tracker = _build_tracker(ctx, vault_dir, live=True)
    if not tracker.start_timer(note):
        raise typer.Exit(code=1)
    try:
        input()
    except (KeyboardInterrupt, EOFError):
        pass
    finally:
        typer.echo()
        update = tracker.stop_timer()
        tracker.shutdown()
    if update is None:
        raise typer.Exit(code=1)


@app.command()
def shell(
    ctx: typer.Context,
    vault_dir: Path = VaultOption,
) -> None:
    """Interactive prompt with start, stop, toggle, status and quit commands."""
    tracker = _build_tracker(ctx, vault_dir, live=False)
    try:
        while True:
            try:
                line = typer.prompt("timer", default="", show_default=False)
            except (KeyboardInterrupt, EOFError, typer.Abort):
                break
            words = line.split()
            if not words:
                continue
            command, args = words[0].lower(), words[1:]
            label = " ".join(args) or None
            if command == "start":
                tracker.start_timer(label)
            elif command == "stop":
                tracker.stop_timer()
            elif command == "toggle":
                tracker.toggle_timer(label)
            elif command == "status":
                typer.echo(tracker.indicator_text())
            elif command in {"quit", "exit"}:
                break
            else:
                typer.echo(f"Unknown command {command!r}.")
    finally:
        if tracker.timer.is_running:
            typer.echo("Stopping the running timer before exit.")
            tracker.stop_timer()
        tracker.shutdown()
        if tracker.total_seconds:
            typer.echo(f"Logged {format_duration(tracker.total_seconds)} this session.")


@app.command()
def record(
    ctx: typer.Context,
    note: str = typer.Argument(..., help="Note to add the session to."),
    start: str = typer.Option(..., "--start", help="Start time (YYYY-MM-DD HH:MM:SS)."),
    end: str = typer.Option(..., "--end", help="End time (YYYY-MM-DD HH:MM:SS)."),
    vault_dir: Path = VaultOption,
) -> None:
    """Add a past session to a note."""
    try:
        session = Session(start=parse_timestamp(start), end=parse_timestamp(end))
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    path = _resolve_note(vault_dir, note, ctx.obj)
    update = record_session(Vault.read(path), session, ctx.obj)
    Vault.write(path, update.text)
    _echo_warnings(update.warnings)
    typer.echo(
        f"Logged {format_duration(session.duration_seconds)} to {path.stem}. "
        f"Total time: {format_duration(update.total_seconds)}"
    )


@app.command()
def recount(
    ctx: typer.Context,
    note: str = typer.Argument(..., help="Note whose total should be recomputed."),
    vault_dir: Path = VaultOption,
) -> None:
    """Recompute a note's total time from its session log."""
    path = _resolve_note(vault_dir, note, ctx.obj)
    original = Vault.read(path)
    update = recount_document(original, ctx.obj)
    if update.text != original:
        Vault.write(path, update.text)
    _echo_warnings(update.warnings)
    typer.echo(f"Total time for {path.stem}: {format_duration(update.total_seconds)}")


@app.command()
def show(
    ctx: typer.Context,
    note: str = typer.Argument(..., help="Note to summarize."),
    vault_dir: Path = VaultOption,
) -> None:
    """Print the session log and total time of a note."""
    from .reporting import LogPrinter

    path = _resolve_note(vault_dir, note, ctx.obj)
    LogPrinter(ctx.obj).print_note(path)


def _build_tracker(ctx: typer.Context, vault_dir: Path, *, live: bool) -> TimeTracker:
    settings: TrackerSettings = ctx.obj
    indicator = _redraw_indicator if live else None
    return TimeTracker(
        Vault(vault_dir, suffix=settings.note_suffix),
        settings,
        notify=typer.echo,
        indicator=indicator,
    )


def _redraw_indicator(text: str) -> None:
    typer.echo(f"\r{text}   ", nl=False, err=True)


def _resolve_note(vault_dir: Path, note: str, settings: TrackerSettings) -> Path:
    try:
        return Vault(vault_dir, suffix=settings.note_suffix).resolve(note)
    except DocumentNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _echo_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        typer.echo(f"Warning: {warning}", err=True)
