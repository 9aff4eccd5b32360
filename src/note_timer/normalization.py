"""Utilities to normalize the labels that identify notes."""

from __future__ import annotations

import re
from pathlib import PurePath
from typing import Optional

_NOTE_SUFFIXES: tuple[str, ...] = (".md", ".markdown")

_WIKILINK_PATTERN = re.compile(r"^\[\[(?P<target>[^\]|#]+)(?:[#|][^\]]*)?\]\]$")


def normalize_label(value: Optional[str]) -> Optional[str]:
    """Reduce a note name, path or ``[[wikilink]]`` to the note's base name."""
    if not value:
        return None
    normalized = value.strip()
    link = _WIKILINK_PATTERN.match(normalized)
    if link:
        normalized = link.group("target").strip()

    normalized = PurePath(normalized.replace("\\", "/")).name
    for suffix in _NOTE_SUFFIXES:
        if normalized.lower().endswith(suffix):
            normalized = normalized[: -len(suffix)]
            break

    normalized = re.sub(r"\s{2,}", " ", normalized).strip()
    return normalized or None
