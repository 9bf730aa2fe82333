"""Section parsing for CLAUDE.md-style documents.

A document is split at ATX headings into an ordered list of titled
sections. Each section remembers which bundle it came from plus the
priority/mergeability declared for its title in that bundle's metadata.

Headings inside fenced code blocks are treated as body text, so shell
comments in ```bash blocks never open a section.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from config_composer.core.config import TitleSynonym, default_config
from config_composer.core.exceptions import ConfigurationError, ValidationError
from config_composer.core.utils.text.markdown import fenced_lines, parse_heading
from .diagnostics import EMPTY_TITLE, PREAMBLE, UNCLOSED_FENCE, Diagnostics

logger = logging.getLogger(__name__)

_NON_TITLE_CHARS = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class SectionMeta:
    """Per-bundle priority/mergeability for a section title."""

    title: str
    priority: int = 0
    mergeable: bool = True

    @classmethod
    def from_value(cls, raw: Union["SectionMeta", Mapping[str, Any]]) -> "SectionMeta":
        if isinstance(raw, SectionMeta):
            return raw
        if not isinstance(raw, Mapping) or not isinstance(raw.get("title"), str):
            raise ValidationError(f"Section metadata needs a string 'title': {raw!r}")
        priority = raw.get("priority", 0)
        mergeable = raw.get("mergeable", True)
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise ValidationError(f"Section metadata priority must be an integer: {raw!r}")
        if not isinstance(mergeable, bool):
            raise ValidationError(f"Section metadata mergeable must be a boolean: {raw!r}")
        return cls(title=raw["title"], priority=priority, mergeable=mergeable)


@dataclass(frozen=True)
class Section:
    """One heading-delimited block of a source document."""

    title: str
    level: int
    content: str
    source: str
    priority: int = 0
    mergeable: bool = True

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()


def normalize_title(title: str, synonyms: Optional[Iterable[TitleSynonym]] = None) -> str:
    """Return the bucket key for a section title.

    Lower-cases, strips everything but ``[a-z0-9]`` and whitespace, collapses
    whitespace, then collapses onto a canonical key when the result contains
    one of the synonym phrases (first match wins).

    Example:
        >>> normalize_title("  Breaking Changes in Next.js 15! ")
        'breaking changes'
        >>> normalize_title("Next.js 15 Development Assistant")
        'project context'
        >>> normalize_title("API   Routes")
        'api routes'
    """
    key = _WHITESPACE.sub(" ", _NON_TITLE_CHARS.sub("", title.lower())).strip()
    table = default_config().title_synonyms if synonyms is None else synonyms
    for synonym in table:
        if synonym.phrase in key:
            return synonym.canonical
    return key


class SectionParser:
    """Split markdown documents into :class:`Section` records.

    Text before the first heading (or a document with no headings at all) is
    kept as a level-2 section titled ``PREAMBLE_TITLE`` and reported as a
    ``preamble`` diagnostic. A heading without a title is dropped, but the
    lines under it stay with the section above.
    """

    PREAMBLE_TITLE = "Project Context"
    PREAMBLE_LEVEL = 2

    def __init__(self, diagnostics: Optional[Diagnostics] = None) -> None:
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def parse(
        self,
        document: str,
        source: str,
        section_meta: Optional[Sequence[Union[SectionMeta, Mapping[str, Any]]]] = None,
    ) -> List[Section]:
        """Parse ``document`` into sections tagged with ``source``.

        Raises:
            ConfigurationError: ``document`` is not a string or ``source`` is blank.
            ValidationError: ``section_meta`` entries are malformed.
        """
        if not isinstance(document, str):
            raise ConfigurationError(
                f"Document content must be a string, got {type(document).__name__}",
                context={"source": source if isinstance(source, str) else None},
            )
        if not isinstance(source, str) or not source.strip():
            raise ConfigurationError("Document source label is required")

        lookup = self._meta_lookup(section_meta)
        sections: List[Section] = []
        lines = document.splitlines()
        in_fence, unclosed = fenced_lines(lines)
        for index in unclosed:
            self.diagnostics.warn(
                UNCLOSED_FENCE,
                f"Code fence opened on line {index + 1} is never closed; reading on as plain text",
                source=source,
            )

        heading: Optional[tuple[int, str]] = None
        buffer: List[str] = []

        def flush() -> None:
            body = "\n".join(buffer).strip()
            if heading is not None:
                sections.append(self._make_section(heading[0], heading[1], body, source, lookup))
            elif body:
                self.diagnostics.warn(
                    PREAMBLE,
                    f"Text before the first heading is kept as '{self.PREAMBLE_TITLE}'",
                    source=source,
                )
                sections.append(
                    self._make_section(self.PREAMBLE_LEVEL, self.PREAMBLE_TITLE, body, source, lookup)
                )

        for lineno, line in enumerate(lines, start=1):
            parsed = None if in_fence[lineno - 1] else parse_heading(line)
            if parsed is None:
                buffer.append(line)
                continue

            level, title = parsed
            if not title:
                # The heading goes; its text stays with the section above.
                self.diagnostics.warn(
                    EMPTY_TITLE,
                    f"Skipping heading without a title on line {lineno}",
                    source=source,
                )
                continue

            flush()
            buffer = []
            heading = (level, title)

        flush()
        return sections

    @staticmethod
    def _meta_lookup(
        section_meta: Optional[Sequence[Union[SectionMeta, Mapping[str, Any]]]],
    ) -> Dict[str, SectionMeta]:
        lookup: Dict[str, SectionMeta] = {}
        for raw in section_meta or []:
            meta = SectionMeta.from_value(raw)
            lookup.setdefault(meta.title.strip().lower(), meta)
        return lookup

    @staticmethod
    def _make_section(
        level: int,
        title: str,
        content: str,
        source: str,
        lookup: Mapping[str, SectionMeta],
    ) -> Section:
        meta = lookup.get(title.lower())
        return Section(
            title=title,
            level=level,
            content=content,
            source=source,
            priority=meta.priority if meta else 0,
            mergeable=meta.mergeable if meta else True,
        )


__all__ = ["Section", "SectionMeta", "SectionParser", "normalize_title"]
