"""Shared utilities for the composer (merging, text, I/O, logging)."""
from __future__ import annotations

from .merge import dedupe, deep_merge, merge_arrays

__all__ = ["deep_merge", "merge_arrays", "dedupe"]
