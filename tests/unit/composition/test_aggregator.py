from __future__ import annotations

import pytest

from config_composer.core.composition.aggregator import SectionAggregator, SectionBucket, select_best
from config_composer.core.composition.diagnostics import SECTION_SKIPPED
from config_composer.core.composition.sections import Section


def _section(content: str, *, priority: int = 0, source: str = "a", mergeable: bool = True) -> Section:
    return Section(
        title="T", level=2, content=content, source=source, priority=priority, mergeable=mergeable
    )


def test_sections_group_by_normalized_title_in_first_seen_order() -> None:
    aggregator = SectionAggregator()
    assert aggregator.add("## Testing Strategy\nA\n## API Routes\nB", "a") == 2
    assert aggregator.add("## api routes!\nC\n## Testing guidelines\nD", "b") == 2

    buckets = aggregator.buckets
    assert list(buckets) == ["testing strategy", "api routes"]
    assert [s.content for s in buckets["api routes"].sections] == ["B", "C"]
    assert buckets["testing strategy"].sources == ["a", "b"]
    assert buckets["testing strategy"].order == 0
    assert aggregator.section_count == 4


def test_unmappable_title_is_skipped_with_warning() -> None:
    aggregator = SectionAggregator()
    added = aggregator.add("## !!!\nlost\n## Kept\nbody", "a")

    assert added == 1
    assert list(aggregator.buckets) == ["kept"]
    assert aggregator.diagnostics.codes == [SECTION_SKIPPED]


def test_clear_drops_all_buckets() -> None:
    aggregator = SectionAggregator()
    aggregator.add("## A\nx", "a")
    aggregator.clear()
    assert aggregator.buckets == {}
    assert aggregator.section_count == 0


def test_select_best_prefers_priority_then_length_then_first() -> None:
    short_high = _section("x", priority=5)
    long_low = _section("much longer content", priority=1)
    assert select_best([long_low, short_high]) is short_high

    first = _section("same")
    second = _section("same")
    assert select_best([first, second]) is first

    longer = _section("longer body")
    assert select_best([first, longer]) is longer

    with pytest.raises(ValueError):
        select_best([])


def test_bucket_properties() -> None:
    bucket = SectionBucket(
        key="t",
        order=0,
        sections=[
            _section("", priority=9, source="a"),
            _section("body", priority=2, source="b"),
            _section("more", source="b", mergeable=False),
        ],
    )

    assert bucket.max_priority == 9
    assert bucket.sources == ["a", "b"]
    assert bucket.contributing_sources == ["b"]
    assert not bucket.is_mergeable
    assert not bucket.is_empty
    # Title-only sections are never chosen while a filled one exists.
    assert bucket.best.content == "body"


def test_bucket_of_title_only_sections_is_empty() -> None:
    bucket = SectionBucket(key="t", order=0, sections=[_section(""), _section("  ")])
    assert bucket.is_empty
    assert bucket.contributing_sources == []
