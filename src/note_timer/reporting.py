"""Simple reporting utilities for CLI output."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import TrackerSettings
from .frontmatter import MetadataBlock
from .session_log import merge_log
from .vault import Vault


class LogPrinter:
    """Render a note's session log in the console."""

    def __init__(self, settings: Optional[TrackerSettings] = None) -> None:
        self.settings = settings or TrackerSettings()

    def print_note(self, path: Path) -> None:
        block = MetadataBlock.parse(Vault.read(path))
        lines = block.get_block_lines(self.settings.log_key)
        if not lines:
            print(f"No sessions recorded in {path.name}.")
            return

        result = merge_log("\n".join(lines), marker=self.settings.marker)
        stored = block.get_value(self.settings.duration_key)

        print(f"Sessions for {path.stem}")
        print("-" * 40)
        for line in result.lines:
            print(f"  {line}")
        print()
        print(f"Total time: {result.total_label}")
        if stored is not None and stored != result.total_label:
            print(f"Stored total {stored!r} is out of date; run 'recount' to fix it.")
        for warning in result.warnings:
            print(f"Warning: {warning}")

