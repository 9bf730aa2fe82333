"""Section merge strategies.

- base: MergeStrategy, StrategyContext and attribution helpers
- markdown: the concrete strategies and per-bucket dispatch
"""
from .base import MergeStrategy, StrategyContext, attribution_line, with_attribution
from .markdown import (
    PROJECT_CONTEXT_KEY,
    ContextMergeStrategy,
    LineDedupStrategy,
    NumberedListStrategy,
    SelectBestStrategy,
    select_strategy,
)

__all__ = [
    "MergeStrategy",
    "StrategyContext",
    "attribution_line",
    "with_attribution",
    "PROJECT_CONTEXT_KEY",
    "SelectBestStrategy",
    "ContextMergeStrategy",
    "NumberedListStrategy",
    "LineDedupStrategy",
    "select_strategy",
]
