"""File access for a directory of Markdown notes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional

from .errors import DocumentNotFoundError
from .normalization import normalize_label

logger = logging.getLogger(__name__)


class Vault:
    """A directory tree of notes, addressed by their base names."""

    def __init__(self, root: Path, suffix: str = ".md") -> None:
        self.root = Path(root)
        self.suffix = suffix

    def notes(self) -> Iterator[Path]:
        return iter(sorted(self.root.rglob(f"*{self.suffix}")))

    def find(self, label: str) -> Optional[Path]:
        """Return the first note whose base name equals ``label``."""
        wanted = normalize_label(label)
        if wanted is None:
            return None
        matches = [path for path in self.notes() if path.stem == wanted]
        if not matches:
            return None
        if len(matches) > 1:
            logger.warning(
                "%d notes named %r; using %s", len(matches), wanted, matches[0]
            )
        return matches[0]

    def resolve(self, label: str) -> Path:
        path = self.find(label)
        if path is None:
            raise DocumentNotFoundError(label)
        return path

    @staticmethod
    def read(path: Path) -> str:
        with Path(path).open("r", encoding="utf-8", newline="") as handle:
            return handle.read()

    @staticmethod
    def write(path: Path, content: str) -> None:
        with Path(path).open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        logger.debug("Wrote %d characters to %s", len(content), path)
