"""Base classes for section merge strategies.

This module provides the foundation for all merge strategies:
- StrategyContext: configuration shared by every strategy call
- MergeStrategy: abstract base class turning one bucket into markdown
- attribution helpers for multi-source results
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from config_composer.core.config import ComposerConfig, default_config
from ..aggregator import SectionBucket

ATTRIBUTION_PREFIX = "*Combined from:"


@dataclass(frozen=True)
class StrategyContext:
    """Context information for merge operations."""

    config: ComposerConfig = field(default_factory=default_config)


def attribution_line(sources: Sequence[str]) -> str:
    """Render the ``*Combined from: a, b*`` line."""
    return f"{ATTRIBUTION_PREFIX} {', '.join(sources)}*"


def is_attribution(line: str) -> bool:
    return line.strip().startswith(ATTRIBUTION_PREFIX)


def with_attribution(body: str, sources: Sequence[str]) -> str:
    """Prefix ``body`` with an attribution line when two or more sources were combined."""
    if len(sources) < 2:
        return body
    return f"{attribution_line(sources)}\n\n{body}"


class MergeStrategy(ABC):
    """Abstract base class for merge strategies.

    All strategies implement merge() to turn the sections of one bucket into
    the markdown body rendered under that bucket's heading.
    """

    name: str = "abstract"

    @abstractmethod
    def merge(self, bucket: SectionBucket, context: StrategyContext) -> str:
        """Combine the sections of ``bucket``.

        Args:
            bucket: Sections sharing one normalized title, in aggregation order
            context: Strategy context with composer configuration

        Returns:
            Markdown body (without the heading line)
        """
        ...


__all__ = [
    "ATTRIBUTION_PREFIX",
    "MergeStrategy",
    "StrategyContext",
    "attribution_line",
    "is_attribution",
    "with_attribution",
]
