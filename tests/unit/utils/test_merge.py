from __future__ import annotations

from config_composer.core.utils.merge import dedupe, deep_merge, merge_arrays


def test_deep_merge_recurses_and_concatenates_lists() -> None:
    base = {"a": 1, "b": {"c": [1], "keep": True}}
    override = {"a": 2, "b": {"c": [2], "d": 3}}

    assert deep_merge(base, override) == {"a": 2, "b": {"c": [1, 2], "keep": True, "d": 3}}


def test_deep_merge_does_not_mutate_inputs() -> None:
    base = {"rules": {"list": [1]}}
    override = {"rules": {"list": [2]}}
    merged = deep_merge(base, override)
    merged["rules"]["list"].append(99)

    assert base == {"rules": {"list": [1]}}
    assert override == {"rules": {"list": [2]}}


def test_deep_merge_type_mismatch_takes_override() -> None:
    assert deep_merge({"x": {"y": 1}}, {"x": "flat"}) == {"x": "flat"}
    assert deep_merge({"x": [1]}, {"x": {"y": 1}}) == {"x": {"y": 1}}


def test_deep_merge_accepts_none_override() -> None:
    assert deep_merge({"a": 1}, None) == {"a": 1}


def test_merge_arrays_concatenates() -> None:
    assert merge_arrays([1, 2], [2, 3]) == [1, 2, 2, 3]


def test_dedupe_keeps_first_seen_order() -> None:
    assert dedupe(["Read", "Write", "Read", "Exec", "Write"]) == ["Read", "Write", "Exec"]
