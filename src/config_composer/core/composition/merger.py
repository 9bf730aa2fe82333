"""Top-level entry point of the section pipeline.

``ConfigMerger.merge`` takes bundle records shaped like::

    {
        "content": "# Title\\n...",
        "metadata": {"name": "nextjs-15", "version": "1.0.0", "sections": [...]},
        "dependencies": {"engines": {...}, "peerDependencies": {...}},  # optional
    }

and returns the combined document plus every recoverable warning raised
while producing it. A fresh aggregator is built for each call, so one
merger instance can be shared between callers.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from config_composer.core.config import ComposerConfig, default_config
from config_composer.core.exceptions import ConfigurationError
from config_composer.core.schemas import validate_bundle_metadata
from .aggregator import SectionAggregator
from .assembler import BundleInfo, Clock, DocumentAssembler
from .diagnostics import Diagnostics
from .strategies import StrategyContext

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Combined document plus the recoverable anomalies met on the way."""

    content: str
    warnings: List[str] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)
    bucket_count: int = 0
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


class ConfigMerger:
    """Merge CLAUDE.md documents from several bundles into one."""

    def __init__(self, config: Optional[ComposerConfig] = None, clock: Optional[Clock] = None) -> None:
        self.config = config if config is not None else default_config()
        self.clock = clock

    def merge(
        self,
        configs: Sequence[Mapping[str, Any]],
        *,
        dependencies: Optional[Sequence[Optional[Mapping[str, Any]]]] = None,
    ) -> MergeResult:
        """Merge ``configs`` in caller order.

        Args:
            configs: Bundle records (``content`` + ``metadata``)
            dependencies: Optional per-bundle dependency maps, parallel to
                ``configs``; a record's own ``dependencies`` key takes precedence

        Raises:
            ConfigurationError: A record breaks the input contract, or the
                supplied bundles contain no sections at all.
            ValidationError: Bundle metadata fails schema validation.
        """
        if configs is None or isinstance(configs, (str, bytes, Mapping)):
            raise ConfigurationError("merge() expects a sequence of bundle records")
        if dependencies is not None and len(dependencies) != len(configs):
            raise ConfigurationError(
                "dependencies must have one entry per bundle",
                context={"bundles": len(configs), "dependencies": len(dependencies)},
            )

        diagnostics = Diagnostics()
        assembler = DocumentAssembler(
            context=StrategyContext(config=self.config),
            diagnostics=diagnostics,
            clock=self.clock,
        )

        if not configs:
            logger.info("No configurations supplied; rendering placeholder document")
            return MergeResult(content=assembler.empty_document())

        bundles: List[BundleInfo] = []
        documents: List[Tuple[str, Any]] = []
        for index, record in enumerate(configs):
            content, metadata = self._check_record(record, index)
            documents.append((content, metadata.get("sections")))
            deps = record.get("dependencies")
            if deps is None and dependencies is not None:
                deps = dependencies[index]
            bundles.append(BundleInfo.from_record(metadata, deps))

        aggregator = SectionAggregator(synonyms=self.config.title_synonyms, diagnostics=diagnostics)
        for (content, section_meta), bundle in zip(documents, bundles):
            aggregator.add(content, bundle.name, section_meta)

        if aggregator.section_count == 0:
            raise ConfigurationError(
                "Supplied configurations contain no mergeable content",
                context={"sources": [b.name for b in bundles]},
            )

        buckets = aggregator.buckets
        content = assembler.assemble(buckets, bundles)
        logger.info("Merged %d configurations into %d sections", len(bundles), len(buckets))
        return MergeResult(
            content=content,
            warnings=diagnostics.warnings,
            sources=[b.name for b in bundles],
            bucket_count=len(buckets),
            diagnostics=diagnostics,
        )

    @staticmethod
    def _check_record(record: Any, index: int) -> Tuple[str, Mapping[str, Any]]:
        if not isinstance(record, Mapping):
            raise ConfigurationError(f"Bundle record #{index} must be a mapping")
        content = record.get("content")
        if not isinstance(content, str):
            raise ConfigurationError(
                f"Bundle record #{index} content must be a string",
                context={"index": index, "type": type(content).__name__},
            )
        metadata = record.get("metadata")
        if not isinstance(metadata, Mapping):
            raise ConfigurationError(
                f"Bundle record #{index} is missing its metadata", context={"index": index}
            )
        validate_bundle_metadata(dict(metadata))
        return content, metadata


__all__ = ["ConfigMerger", "MergeResult"]
