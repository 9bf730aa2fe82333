"""Content-aware merge strategies for section buckets.

Which strategy runs is decided per bucket by :func:`select_strategy`:

- SelectBestStrategy: single contributing source, or any section marked
  non-mergeable. The highest-priority (then longest) section wins outright.
- ContextMergeStrategy: the "project context" bucket. One description block
  per source behind a framing sentence.
- NumberedListStrategy: content shaped like a numbered list. Items are
  deduplicated across sources and renumbered from 1.
- LineDedupStrategy: everything else. Lines are deduplicated per
  ``###`` subsection, whitespace/punctuation-insensitively.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from config_composer.core.utils.text.markdown import (
    NUMBERED_ITEM_PATTERN,
    fenced_lines,
    is_fence,
    normalize_line,
)
from ..aggregator import SectionBucket
from .base import MergeStrategy, StrategyContext, is_attribution, with_attribution

PROJECT_CONTEXT_KEY = "project context"

SUBHEADING_PATTERN = re.compile(r"^#{3,}\s")
_WHITESPACE = re.compile(r"\s+")


class SelectBestStrategy(MergeStrategy):
    """Pick the single best section; nothing is combined."""

    name = "select-best"

    def merge(self, bucket: SectionBucket, context: StrategyContext) -> str:
        return bucket.best.content


class ContextMergeStrategy(MergeStrategy):
    """Narrative merge for the project-context bucket."""

    name = "context"

    def merge(self, bucket: SectionBucket, context: StrategyContext) -> str:
        blocks: List[Tuple[str, str]] = []
        for source in bucket.contributing_sources:
            parts = [s.content for s in bucket.sections if s.source == source and not s.is_empty]
            text = "\n".join(
                line for line in "\n\n".join(parts).splitlines() if not is_attribution(line)
            ).strip()
            if text:
                blocks.append((source, text))

        if not blocks:
            return ""
        if len(blocks) == 1:
            return blocks[0][1]

        paragraphs = [text for _, text in blocks]
        framing = context.config.context_framing.strip()
        if framing:
            paragraphs.insert(0, framing)
        return with_attribution("\n\n".join(paragraphs), [source for source, _ in blocks])


@dataclass
class _ListEntry:
    kind: str  # "item" | "text" | "blank"
    lines: List[str] = field(default_factory=list)


class NumberedListStrategy(MergeStrategy):
    """Merge numbered lists item-by-item, then renumber the survivors.

    An item starts at an unindented ``N.`` line and continues over the
    indented lines immediately after it; a blank line or the next numbered
    line closes it. Items are compared by their text with the number removed,
    lower-cased and whitespace-collapsed; the first occurrence is kept. Lines
    outside any item, code fences included, are passed through verbatim in
    place; only earlier attribution lines are dropped.
    """

    name = "numbered-list"

    @staticmethod
    def matches(bucket: SectionBucket) -> bool:
        """True when a numbered line appears outside fenced code."""
        for section in bucket.sections:
            lines = section.content.splitlines()
            in_fence, _ = fenced_lines(lines)
            if any(
                NUMBERED_ITEM_PATTERN.match(line) and not fenced
                for line, fenced in zip(lines, in_fence)
            ):
                return True
        return False

    @staticmethod
    def item_key(lines: List[str]) -> str:
        match = NUMBERED_ITEM_PATTERN.match(lines[0])
        first = match.group(2) if match else lines[0]
        text = " ".join([first, *(line.strip() for line in lines[1:])])
        return _WHITESPACE.sub(" ", text.lower()).strip()

    def merge(self, bucket: SectionBucket, context: StrategyContext) -> str:
        entries: List[_ListEntry] = []
        seen_items: Set[str] = set()
        pending_blank = False

        def emit(entry: _ListEntry) -> None:
            nonlocal pending_blank
            if pending_blank and entries:
                entries.append(_ListEntry("blank"))
            pending_blank = False
            entries.append(entry)

        def close(item: Optional[List[str]]) -> None:
            if item is None:
                return
            key = self.item_key(item)
            if key in seen_items:
                return
            seen_items.add(key)
            emit(_ListEntry("item", item))

        for section in bucket.sections:
            if section.is_empty:
                continue
            item: Optional[List[str]] = None
            fence: Optional[str] = None
            for line in section.content.splitlines():
                if fence is not None:
                    if line.strip().startswith(fence):
                        fence = None
                    emit(_ListEntry("text", [line]))
                    continue
                if NUMBERED_ITEM_PATTERN.match(line):
                    close(item)
                    item = [line]
                elif item is not None and line.strip() and line[:1] in (" ", "\t"):
                    item.append(line)
                else:
                    close(item)
                    item = None
                    if is_fence(line):
                        fence = line.strip()[:3]
                        emit(_ListEntry("text", [line]))
                    elif not line.strip():
                        pending_blank = True
                    elif not is_attribution(line):
                        emit(_ListEntry("text", [line]))
            close(item)

        return with_attribution(self._render(entries), bucket.contributing_sources)

    @staticmethod
    def _render(entries: List[_ListEntry]) -> str:
        out: List[str] = []
        number = 0
        for entry in entries:
            if entry.kind == "blank":
                out.append("")
            elif entry.kind == "item":
                number += 1
                match = NUMBERED_ITEM_PATTERN.match(entry.lines[0])
                text = match.group(2) if match else entry.lines[0]
                out.append(f"{number}. {text}")
                out.extend(entry.lines[1:])
            else:
                out.extend(entry.lines)
        return "\n".join(out).strip("\n")


@dataclass
class _Subsection:
    label: Optional[str]
    units: List[str] = field(default_factory=list)
    seen: Set[str] = field(default_factory=set)
    pending_blank: bool = False

    def add(self, unit: str) -> None:
        key = normalize_line(unit)
        if key in self.seen:
            return
        self.seen.add(key)
        if self.pending_blank and self.units:
            self.units.append("")
        self.pending_blank = False
        self.units.append(unit)


class LineDedupStrategy(MergeStrategy):
    """General merge: keep every distinct line, grouped by ``###`` subsection.

    A fenced code block counts as a single unit so code is never split.
    Blank lines become single separators and only appear between retained
    lines, so merging a section with an identical copy adds nothing.
    """

    name = "line-dedup"

    @staticmethod
    def units(content: str) -> List[str]:
        """Split content into lines, keeping each fenced code block whole."""
        result: List[str] = []
        block: Optional[List[str]] = None
        fence = ""
        for line in content.splitlines():
            if block is not None:
                block.append(line)
                if line.strip().startswith(fence):
                    result.append("\n".join(block))
                    block = None
                continue
            if is_fence(line):
                fence = line.strip()[:3]
                block = [line]
                continue
            result.append(line)
        if block is not None:
            result.append("\n".join(block))
        return result

    def merge(self, bucket: SectionBucket, context: StrategyContext) -> str:
        subsections: Dict[Optional[str], _Subsection] = {}

        for section in bucket.sections:
            if section.is_empty:
                continue
            for sub in subsections.values():
                sub.pending_blank = True
            current = subsections.setdefault(None, _Subsection(label=None))
            for unit in self.units(section.content):
                stripped = unit.strip()
                if SUBHEADING_PATTERN.match(unit):
                    current = subsections.setdefault(stripped, _Subsection(label=stripped))
                    continue
                if not stripped:
                    current.pending_blank = True
                    continue
                if is_attribution(unit):
                    continue
                current.add(unit)

        blocks: List[str] = []
        for sub in subsections.values():
            if not sub.units:
                continue
            body = "\n".join(sub.units)
            blocks.append(f"{sub.label}\n{body}" if sub.label else body)
        return with_attribution("\n\n".join(blocks), bucket.contributing_sources)


_SELECT_BEST = SelectBestStrategy()
_CONTEXT = ContextMergeStrategy()
_NUMBERED = NumberedListStrategy()
_LINES = LineDedupStrategy()


def select_strategy(bucket: SectionBucket) -> MergeStrategy:
    """Choose the merge strategy for one bucket."""
    if not bucket.is_mergeable or len(bucket.contributing_sources) < 2:
        return _SELECT_BEST
    if bucket.key == PROJECT_CONTEXT_KEY:
        return _CONTEXT
    if NumberedListStrategy.matches(bucket):
        return _NUMBERED
    return _LINES


__all__ = [
    "PROJECT_CONTEXT_KEY",
    "SelectBestStrategy",
    "ContextMergeStrategy",
    "NumberedListStrategy",
    "LineDedupStrategy",
    "select_strategy",
]
