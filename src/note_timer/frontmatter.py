"""Read and edit the ``---`` delimited metadata block at the top of a note.

The block is split into fields, each holding the verbatim lines it spans: the
``key: value`` line plus any indented or list continuation lines that follow.
Only the fields that are explicitly set are rewritten; every other line of the
block and of the body is rendered back exactly as it was read.
"""

from __future__ import annotations

import logging
import re
import textwrap
from dataclasses import dataclass, field
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

DELIMITER = "---"

_KEY_PATTERN = re.compile(
    r"""^(?:"(?P<dquoted>[^"]*)"|'(?P<squoted>[^']*)'|(?P<plain>[^\s#'"\-?:\[{][^:]*?))"""
    r"\s*:(?:[ \t]+(?P<value>.*?))?\s*$"
)
_LIST_ITEM = re.compile(r"^-(\s|$)")
_BLOCK_INDICATOR = re.compile(r"^[|>][-+]?\d*(\s+#.*)?$")


@dataclass(slots=True)
class Field:
    key: Optional[str]
    lines: list[str] = field(default_factory=list)

    @property
    def value(self) -> Optional[str]:
        if self.key is None or not self.lines:
            return None
        match = _KEY_PATTERN.match(self.lines[0])
        return (match.group("value") or "") if match else None


def _key_of(match: re.Match) -> str:
    for group in ("dquoted", "squoted", "plain"):
        key = match.group(group)
        if key is not None:
            return key
    return ""


class MetadataBlock:
    """Ordered, loss-free view of a note's front matter."""

    def __init__(
        self,
        fields: Optional[list[Field]] = None,
        body: str = "",
        *,
        newline: str = "\n",
        present: bool = False,
        closing_newline: Optional[str] = None,
    ) -> None:
        self.fields: list[Field] = fields or []
        self.body = body
        self.newline = newline
        self.present = present
        self._closing_newline = newline if closing_newline is None else closing_newline

    @classmethod
    def parse(cls, text: str) -> "MetadataBlock":
        newline = "\r\n" if "\r\n" in text else "\n"
        lines = text.splitlines(keepends=True)
        if not lines or _strip_eol(lines[0]).rstrip() != DELIMITER:
            return cls(body=text, newline=newline)

        for index in range(1, len(lines)):
            if _strip_eol(lines[index]).rstrip() == DELIMITER:
                closing = lines[index][len(_strip_eol(lines[index])):]
                block_lines = [_strip_eol(line) for line in lines[1:index]]
                return cls(
                    _group_fields(block_lines),
                    "".join(lines[index + 1 :]),
                    newline=newline,
                    present=True,
                    closing_newline=closing,
                )
        # An opening delimiter with no closing one is body text, not a block.
        return cls(body=text, newline=newline)

    def keys(self) -> list[str]:
        return [f.key for f in self.fields if f.key is not None]

    def get_value(self, key: str) -> Optional[str]:
        """Return the inline value written after ``key:``."""
        found = self._find(key)
        return found.value if found else None

    def get_block_lines(self, key: str) -> Optional[list[str]]:
        """Return the dedented lines of a multi-line value.

        A plain inline value is returned as a single line, followed by any
        continuation lines. ``None`` means the key is absent.
        """
        found = self._find(key)
        if found is None:
            return None
        value = found.value or ""
        continuation = textwrap.dedent("\n".join(found.lines[1:])).splitlines()
        if value and not _BLOCK_INDICATOR.match(value):
            return [value, *continuation]
        return continuation

    def set_value(self, key: str, value: str) -> None:
        self._replace(key, [f"{key}: {value}"])

    def set_block(
        self, key: str, lines: Iterable[str], *, indent: str = "  ", style: str = "|-"
    ) -> None:
        """Write ``lines`` as a literal block scalar under ``key``."""
        rendered = [f"{key}: {style}"]
        rendered.extend(f"{indent}{line}" if line else "" for line in lines)
        self._replace(key, rendered)

    def render(self) -> str:
        if not self.present and not self.fields:
            return self.body
        nl = self.newline
        block = "".join(line + nl for f in self.fields for line in f.lines)
        closing = self._closing_newline if self.present else nl
        return f"{DELIMITER}{nl}{block}{DELIMITER}{closing}{self.body}"

    def _find(self, key: str) -> Optional[Field]:
        for f in self.fields:
            if f.key == key:
                return f
        return None

    def _replace(self, key: str, lines: list[str]) -> None:
        positions = [i for i, f in enumerate(self.fields) if f.key == key]
        if not positions:
            self.fields.append(Field(key, lines))
            return

        first = self.fields[positions[0]]
        first.lines = lines + _trailing_blank_lines(first.lines)
        if len(positions) > 1:
            logger.debug("Collapsing %d duplicate %r fields", len(positions) - 1, key)
            for index in reversed(positions[1:]):
                del self.fields[index]


def _group_fields(lines: list[str]) -> list[Field]:
    fields: list[Field] = []
    for line in lines:
        if fields and _continues(fields[-1], line):
            fields[-1].lines.append(line)
            continue
        match = _KEY_PATTERN.match(line)
        fields.append(Field(_key_of(match) if match else None, [line]))
    return fields


def _continues(previous: Field, line: str) -> bool:
    # Indented and blank lines belong to the field above; a column-0 list
    # only belongs to a key whose inline value is empty.
    if not line.strip() or line[0] in " \t":
        return True
    return bool(_LIST_ITEM.match(line)) and previous.value == ""


def _trailing_blank_lines(lines: list[str]) -> list[str]:
    trailing: list[str] = []
    for line in reversed(lines[1:]):
        if line.strip():
            break
        trailing.append(line)
    return trailing


def _strip_eol(line: str) -> str:
    return line.rstrip("\r\n")
