"""JSON I/O utilities with atomic writes."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, TextIO

from .core import atomic_write

_MISSING = object()  # Sentinel for unset default


def read_json(file_path: Path | str, *, default: Any = _MISSING) -> Any:
    """Read and parse a JSON file.

    Args:
        file_path: Path to JSON file
        default: Value to return if file doesn't exist (optional).
                 If not provided, FileNotFoundError is raised.

    Raises:
        FileNotFoundError: If the file does not exist and no default is provided
        json.JSONDecodeError: If the file is not valid JSON
    """
    path = Path(file_path)
    if not path.exists():
        if default is not _MISSING:
            return default
        raise FileNotFoundError(f"JSON file not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def _json_writer(data: Any, indent: int) -> Callable[[TextIO], None]:
    def _writer(f: TextIO) -> None:
        json.dump(data, f, indent=indent, ensure_ascii=False)
        f.write("\n")

    return _writer


def write_json_atomic(file_path: Path | str, data: Any, *, indent: int = 2) -> None:
    """Atomically write ``data`` as pretty-printed JSON (key order preserved)."""
    atomic_write(Path(file_path), _json_writer(data, indent))


__all__ = ["read_json", "write_json_atomic"]
