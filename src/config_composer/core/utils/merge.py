"""Canonical deep merge utilities.

This module provides the single source of truth for dictionary merging
throughout the composer. Settings rule objects, the composer configuration
overlay and bundle settings all merge through here.

Semantics:
- Nested mappings merge key-by-key, recursively
- Lists concatenate (base items first, then override items)
- Anything else: the override value replaces the base value
"""
from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Recursively merge mappings without mutating inputs.

    Args:
        base: Base mapping (earlier, lower precedence)
        override: Override mapping (later, higher precedence for scalars)

    Returns:
        New merged dictionary

    Example:
        >>> base = {"a": 1, "b": {"c": [1]}}
        >>> override = {"a": 2, "b": {"c": [2], "d": 3}}
        >>> deep_merge(base, override)
        {'a': 2, 'b': {'c': [1, 2], 'd': 3}}
    """
    result: Dict[str, Any] = {key: copy.deepcopy(value) for key, value in base.items()}
    for key, value in (override or {}).items():
        if key in result:
            current = result[key]
            if isinstance(current, Mapping) and isinstance(value, Mapping):
                result[key] = deep_merge(current, value)
            elif isinstance(current, list) and isinstance(value, list):
                result[key] = merge_arrays(current, value)
            else:
                result[key] = copy.deepcopy(value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Concatenate two lists into a new list.

    Example:
        >>> merge_arrays([1, 2], [2, 3])
        [1, 2, 2, 3]
    """
    return [*copy.deepcopy(base), *copy.deepcopy(override)]


def dedupe(items: List[Any]) -> List[Any]:
    """Drop repeated items, keeping first-seen order."""
    seen: set = set()
    result: List[Any] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


__all__ = ["deep_merge", "merge_arrays", "dedupe"]
