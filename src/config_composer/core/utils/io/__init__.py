"""I/O utilities for the composer.

- core: atomic writes, directory management, text I/O
- json: JSON read/write
"""
from __future__ import annotations

from .core import PathLike, atomic_write, ensure_parent_dir, read_text, write_text
from .json import read_json, write_json_atomic

__all__ = [
    # core
    "PathLike",
    "ensure_parent_dir",
    "atomic_write",
    "read_text",
    "write_text",
    # json
    "read_json",
    "write_json_atomic",
]
