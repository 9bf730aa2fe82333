"""Section pipeline: parse, aggregate, merge and assemble CLAUDE.md documents."""
from __future__ import annotations

from .aggregator import SectionAggregator, SectionBucket, select_best
from .assembler import BundleInfo, DocumentAssembler
from .diagnostics import Diagnostic, Diagnostics
from .merger import ConfigMerger, MergeResult
from .sections import Section, SectionMeta, SectionParser, normalize_title
from .strategies import (
    ContextMergeStrategy,
    LineDedupStrategy,
    MergeStrategy,
    NumberedListStrategy,
    SelectBestStrategy,
    StrategyContext,
    select_strategy,
)

__all__ = [
    # Parsing
    "Section",
    "SectionMeta",
    "SectionParser",
    "normalize_title",
    # Aggregation
    "SectionAggregator",
    "SectionBucket",
    "select_best",
    # Strategies
    "MergeStrategy",
    "StrategyContext",
    "SelectBestStrategy",
    "ContextMergeStrategy",
    "NumberedListStrategy",
    "LineDedupStrategy",
    "select_strategy",
    # Assembly
    "BundleInfo",
    "DocumentAssembler",
    "ConfigMerger",
    "MergeResult",
    # Diagnostics
    "Diagnostic",
    "Diagnostics",
]
