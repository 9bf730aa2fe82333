"""Markdown line helpers.

Generic utilities for recognising ATX headings, numbered list items and code
fences, plus the whitespace/punctuation-insensitive line key used for
deduplication.
"""
from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

MAX_HEADING_LEVEL = 6

# '#' run, at least one space or tab, then the title text (possibly empty).
HEADING_PATTERN = re.compile(r"^(#+)[ \t]+(.*?)[ \t]*$")
_CLOSING_HASHES = re.compile(r"[ \t]+#+$")

NUMBERED_ITEM_PATTERN = re.compile(r"^(\d+)\.\s+(.*)$")

FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")

_NON_WORD = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def parse_heading(line: str) -> Optional[Tuple[int, str]]:
    """Parse an ATX heading line into ``(level, title)``.

    Levels deeper than six are clamped to six. The title may be empty
    (``"## "``); callers decide what to do with title-less headings. A bare
    ``#`` run with nothing after it is body text, not a heading.

    Example:
        >>> parse_heading("## Testing ##")
        (2, 'Testing')
        >>> parse_heading("######## Deep")
        (6, 'Deep')
        >>> parse_heading("#!/bin/bash") is None
        True
        >>> parse_heading("##") is None
        True
    """
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    level = min(len(match.group(1)), MAX_HEADING_LEVEL)
    title = _CLOSING_HASHES.sub("", (match.group(2) or "").strip()).strip()
    return level, title


def is_fence(line: str) -> bool:
    """Return True when ``line`` opens or closes a fenced code block."""
    return bool(FENCE_PATTERN.match(line))


def fenced_lines(lines: Sequence[str]) -> Tuple[List[bool], List[int]]:
    """Flag the lines that sit inside a closed fenced code block.

    A fence closes at the next line starting with the same marker. An opener
    that is never closed is reported by index and does not open a block.

    Example:
        >>> fenced_lines(["a", "```", "# x", "```", "~~~", "b"])
        ([False, True, True, True, False, False], [4])
    """
    flags = [False] * len(lines)
    unclosed: List[int] = []
    index = 0
    while index < len(lines):
        if not is_fence(lines[index]):
            index += 1
            continue
        marker = lines[index].strip()[:3]
        close = next(
            (j for j in range(index + 1, len(lines)) if lines[j].strip().startswith(marker)),
            None,
        )
        if close is None:
            unclosed.append(index)
            index += 1
            continue
        for j in range(index, close + 1):
            flags[j] = True
        index = close + 1
    return flags, unclosed


def normalize_line(text: str) -> str:
    """Whitespace- and punctuation-insensitive comparison key for a line.

    Lines made only of punctuation (``---``, ``***``) keep their stripped text
    so they do not all collapse onto the empty key.

    Example:
        >>> normalize_line("  Use   HTTPS! ")
        'use https'
        >>> normalize_line("---")
        '---'
    """
    key = _WHITESPACE.sub(" ", _NON_WORD.sub("", text.lower())).strip()
    return key or text.strip()


__all__ = [
    "MAX_HEADING_LEVEL",
    "HEADING_PATTERN",
    "NUMBERED_ITEM_PATTERN",
    "FENCE_PATTERN",
    "parse_heading",
    "is_fence",
    "fenced_lines",
    "normalize_line",
]
