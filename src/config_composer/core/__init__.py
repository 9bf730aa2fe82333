"""Composer core library: the merge engine and its supporting utilities."""
from __future__ import annotations

from . import exceptions  # noqa: F401

__all__ = ["exceptions"]
