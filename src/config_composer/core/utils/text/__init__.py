"""Text processing utilities.

- frontmatter: YAML frontmatter parsing and formatting
- markdown: heading, list and fence helpers shared by the section pipeline
"""
from __future__ import annotations

from .frontmatter import (
    FRONTMATTER_PATTERN,
    ParsedDocument,
    format_frontmatter,
    has_frontmatter,
    parse_frontmatter,
)
from .markdown import (
    FENCE_PATTERN,
    HEADING_PATTERN,
    NUMBERED_ITEM_PATTERN,
    fenced_lines,
    is_fence,
    normalize_line,
    parse_heading,
)

__all__ = [
    # Frontmatter
    "ParsedDocument",
    "parse_frontmatter",
    "format_frontmatter",
    "has_frontmatter",
    "FRONTMATTER_PATTERN",
    # Markdown
    "HEADING_PATTERN",
    "NUMBERED_ITEM_PATTERN",
    "FENCE_PATTERN",
    "parse_heading",
    "is_fence",
    "fenced_lines",
    "normalize_line",
]
