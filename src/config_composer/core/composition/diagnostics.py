"""Recoverable-anomaly channel for merge operations.

Every recoverable problem (a title-less heading, a section that fails to
map, a bucket that fails to render) is recorded here and returned alongside
the merge result, so callers can inspect warnings without reading logs.
Each record is also logged at WARNING level.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

EMPTY_TITLE = "empty-title"
PREAMBLE = "preamble"
SECTION_SKIPPED = "section-skipped"
BUCKET_RENDER_FAILED = "bucket-render-failed"
ENTITY_PARSE_FAILED = "entity-parse-failed"
HOOK_EVENT_UNRECOGNIZED = "hook-event-unrecognized"
BUNDLE_READ_FAILED = "bundle-read-failed"
UNCLOSED_FENCE = "unclosed-fence"


@dataclass(frozen=True)
class Diagnostic:
    code: str
    message: str
    source: Optional[str] = None

    def __str__(self) -> str:
        if self.source:
            return f"[{self.source}] {self.message}"
        return self.message


@dataclass
class Diagnostics:
    """Ordered collection of recoverable anomalies."""

    records: List[Diagnostic] = field(default_factory=list)

    def warn(self, code: str, message: str, source: Optional[str] = None) -> Diagnostic:
        record = Diagnostic(code=code, message=message, source=source)
        self.records.append(record)
        logger.warning("%s (%s)", record, code)
        return record

    def extend(self, other: "Diagnostics") -> None:
        self.records.extend(other.records)

    @property
    def warnings(self) -> List[str]:
        return [str(r) for r in self.records]

    @property
    def codes(self) -> List[str]:
        return [r.code for r in self.records]

    def __len__(self) -> int:
        return len(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)


__all__ = [
    "Diagnostic",
    "Diagnostics",
    "EMPTY_TITLE",
    "PREAMBLE",
    "SECTION_SKIPPED",
    "BUCKET_RENDER_FAILED",
    "ENTITY_PARSE_FAILED",
    "HOOK_EVENT_UNRECOGNIZED",
    "BUNDLE_READ_FAILED",
    "UNCLOSED_FENCE",
]
