"""Unified CLI output formatting utilities.

Every compose command prints through :class:`OutputFormatter`, supporting
both JSON and text output modes. Command output goes to stdout; errors and
merge warnings go to stderr.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Iterable, Optional

from config_composer.core.exceptions import ComposerError


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON; otherwise output text
            indent: JSON indentation level
        """
        self.json_mode = json_mode
        self.indent = indent

    def success(
        self,
        data: Dict[str, Any],
        message: str,
        *,
        status: str = "success",
    ) -> None:
        """Output success result (``data`` in JSON mode, ``message`` otherwise)."""
        if self.json_mode:
            output = {"status": status, **data}
            print(json.dumps(output, indent=self.indent, default=str))
        else:
            print(message)

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Output error result to stderr.

        Composer errors carry their own code and context in JSON mode.
        """
        msg = message or str(error)
        if self.json_mode:
            if isinstance(error, ComposerError):
                output = {"error": error_code, **error.to_json_error()}
                if message:
                    output["message"] = message
            else:
                output = {"error": error_code, "message": msg}
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def warnings(self, warnings: Iterable[str]) -> None:
        """Print recoverable merge warnings to stderr (text mode only)."""
        if self.json_mode:
            return
        for warning in warnings:
            print(f"Warning: {warning}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        """Output key-value pair in text mode."""
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


__all__ = ["OutputFormatter"]
