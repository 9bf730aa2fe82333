"""Group sections from many documents by normalized title.

Each bundle document is parsed and its sections are appended to the bucket
for their normalized title. Bundles are added in caller order, and that
order is the final tie-break when buckets are sorted for output.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from config_composer.core.config import TitleSynonym
from config_composer.core.utils.merge import dedupe
from .diagnostics import SECTION_SKIPPED, Diagnostics
from .sections import Section, SectionMeta, SectionParser, normalize_title

logger = logging.getLogger(__name__)


def select_best(sections: Sequence[Section]) -> Section:
    """Highest priority wins; ties go to the longest content, then the earliest."""
    if not sections:
        raise ValueError("select_best() needs at least one section")
    best = sections[0]
    for current in sections[1:]:
        if current.priority > best.priority:
            best = current
        elif current.priority == best.priority and len(current.content) > len(best.content):
            best = current
    return best


@dataclass
class SectionBucket:
    """All sections sharing one normalized title, in aggregation order."""

    key: str
    order: int
    sections: List[Section] = field(default_factory=list)

    @property
    def max_priority(self) -> int:
        return max(s.priority for s in self.sections)

    @property
    def sources(self) -> List[str]:
        return dedupe([s.source for s in self.sections])

    @property
    def contributing_sources(self) -> List[str]:
        """Sources that supplied non-empty content."""
        return dedupe([s.source for s in self.sections if not s.is_empty])

    @property
    def is_mergeable(self) -> bool:
        # One explicit mergeable=False vetoes combination for the whole bucket.
        return all(s.mergeable for s in self.sections)

    @property
    def is_empty(self) -> bool:
        return all(s.is_empty for s in self.sections)

    @property
    def best(self) -> Section:
        """Representative section; title-only sections are considered last."""
        filled = [s for s in self.sections if not s.is_empty]
        return select_best(filled or self.sections)


class SectionAggregator:
    """Accumulate sections from several bundles into title buckets."""

    def __init__(
        self,
        *,
        synonyms: Optional[Iterable[TitleSynonym]] = None,
        diagnostics: Optional[Diagnostics] = None,
    ) -> None:
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.synonyms = tuple(synonyms) if synonyms is not None else None
        self.parser = SectionParser(diagnostics=self.diagnostics)
        self._buckets: Dict[str, SectionBucket] = {}
        self._section_count = 0

    @property
    def buckets(self) -> Dict[str, SectionBucket]:
        """Buckets keyed by normalized title, in first-seen order."""
        return dict(self._buckets)

    @property
    def section_count(self) -> int:
        return self._section_count

    def clear(self) -> None:
        self._buckets.clear()
        self._section_count = 0

    def add(
        self,
        document: str,
        source: str,
        section_meta: Optional[Sequence[Union[SectionMeta, Mapping[str, Any]]]] = None,
    ) -> int:
        """Parse ``document`` and file its sections; return how many were added."""
        added = 0
        for section in self.parser.parse(document, source, section_meta):
            try:
                key = normalize_title(section.title, self.synonyms)
                if not key:
                    raise ValueError(f"title {section.title!r} normalizes to an empty key")
            except (TypeError, ValueError, AttributeError) as exc:
                self.diagnostics.warn(
                    SECTION_SKIPPED,
                    f"Skipping section {section.title!r}: {exc}",
                    source=source,
                )
                continue

            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = SectionBucket(key=key, order=len(self._buckets))
                self._buckets[key] = bucket
            bucket.sections.append(section)
            added += 1

        self._section_count += added
        logger.debug("Aggregated %d sections from %s", added, source)
        return added


__all__ = ["SectionAggregator", "SectionBucket", "select_best"]
