"""Render section buckets into the final combined document.

Buckets are sorted by their highest section priority; equal priorities fall
back to the configured ``section_order`` pattern list and then to
aggregation order. Every document ends with a metadata trailer naming the
included bundles, their dependency requirements and when it was generated.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from config_composer.core.exceptions import ConfigurationError
from config_composer.core.utils.merge import dedupe
from .aggregator import SectionBucket
from .diagnostics import BUCKET_RENDER_FAILED, Diagnostics
from .strategies import StrategyContext, select_strategy

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

NO_CONFIGURATIONS = "No configurations were supplied."


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class BundleInfo:
    """What the trailer needs to know about one included bundle."""

    name: str
    version: Optional[str] = None
    description: Optional[str] = None
    engines: Mapping[str, str] = field(default_factory=dict)
    peer_dependencies: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_record(
        cls, metadata: Mapping[str, Any], dependencies: Optional[Mapping[str, Any]] = None
    ) -> "BundleInfo":
        deps = dependencies or {}
        return cls(
            name=str(metadata["name"]),
            version=metadata.get("version"),
            description=metadata.get("description"),
            engines=dict(deps.get("engines") or {}),
            peer_dependencies=dict(deps.get("peerDependencies") or {}),
        )

    def summary_line(self) -> str:
        line = f"- **{self.name}**"
        if self.version:
            line += f" v{self.version}"
        if self.description:
            line += f": {self.description}"
        return line


class DocumentAssembler:
    """Order buckets, merge each one, and render the combined document."""

    def __init__(
        self,
        *,
        context: Optional[StrategyContext] = None,
        diagnostics: Optional[Diagnostics] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.context = context if context is not None else StrategyContext()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.clock = clock or utc_now

    @property
    def config(self):
        return self.context.config

    # ----- Ordering -----
    def pattern_rank(self, key: str) -> int:
        """Index of the first ``section_order`` pattern contained in ``key``."""
        for index, pattern in enumerate(self.config.section_order):
            if pattern in key:
                return index
        return len(self.config.section_order)

    def order(self, buckets: Mapping[str, SectionBucket]) -> List[SectionBucket]:
        return sorted(
            buckets.values(),
            key=lambda b: (-b.max_priority, self.pattern_rank(b.key), b.order),
        )

    # ----- Rendering -----
    def render_bucket(self, bucket: SectionBucket) -> Optional[str]:
        """Render one bucket, or None when it has nothing to show."""
        if bucket.is_empty:
            return None
        strategy = select_strategy(bucket)
        body = strategy.merge(bucket, self.context).strip()
        if not body:
            return None
        best = bucket.best
        logger.debug("Rendered bucket %r with %s", bucket.key, strategy.name)
        return f"{'#' * min(best.level, 2)} {best.title}\n\n{body}\n"

    def assemble(self, buckets: Mapping[str, SectionBucket], bundles: Sequence[BundleInfo]) -> str:
        """Render the full document for ``buckets`` contributed by ``bundles``."""
        if not bundles:
            return self.empty_document()

        lines: List[str] = [
            f"# {self.config.document_title}",
            "",
            f"This configuration combines: {', '.join(b.name for b in bundles)}",
            "",
            "---",
            "",
        ]
        for bucket in self.order(buckets):
            try:
                rendered = self.render_bucket(bucket)
            except Exception as exc:
                self.diagnostics.warn(
                    BUCKET_RENDER_FAILED,
                    f"Could not render section {bucket.key!r}: {exc}",
                    source=", ".join(bucket.sources),
                )
                continue
            if rendered:
                lines.append(rendered)

        lines.extend(self.trailer(bundles))
        document = "\n".join(lines)
        if not document.strip():
            raise ConfigurationError("Assembled document is empty")
        return document

    def empty_document(self) -> str:
        lines = [
            f"# {self.config.document_title}",
            "",
            f"{NO_CONFIGURATIONS} Select one or more configuration bundles to compose.",
            "",
        ]
        lines.extend(self.trailer([]))
        return "\n".join(lines)

    def trailer(self, bundles: Sequence[BundleInfo]) -> List[str]:
        lines = ["", "---", "", "## Configuration Metadata", "", "### Included Configurations", ""]
        if bundles:
            lines.extend(b.summary_line() for b in bundles)
        else:
            lines.append("_No configurations included._")
        lines.append("")

        dependency_lines = self.dependency_summary(bundles)
        if dependency_lines:
            lines.extend(["### Dependency Requirements", "", *dependency_lines, ""])

        lines.extend(
            [
                "### Generation Details",
                "",
                f"- Generated: {format_timestamp(self.clock())}",
                f"- Generator: {self.config.generator_label}",
                "",
            ]
        )
        if self.config.compatibility_notes:
            lines.extend(["### Compatibility Notes", "", *self.config.compatibility_notes, ""])
        return lines

    @staticmethod
    def dependency_summary(bundles: Sequence[BundleInfo]) -> List[str]:
        """Distinct engine and peer-dependency requirements across bundles."""
        engines: Dict[str, List[str]] = {}
        peers: Dict[str, List[str]] = {}
        for bundle in bundles:
            for name, version in bundle.engines.items():
                engines.setdefault(name, []).append(str(version))
            for name, version in bundle.peer_dependencies.items():
                peers.setdefault(name, []).append(str(version))

        lines: List[str] = []
        if engines:
            lines.append("**Engines:**")
            lines.extend(f"- {name}: {', '.join(dedupe(v))}" for name, v in engines.items())
        if peers:
            if lines:
                lines.append("")
            lines.append("**Peer Dependencies:**")
            lines.extend(f"- {name}: {', '.join(dedupe(v))}" for name, v in peers.items())
        return lines


__all__ = ["BundleInfo", "DocumentAssembler", "NO_CONFIGURATIONS", "format_timestamp", "utc_now"]
