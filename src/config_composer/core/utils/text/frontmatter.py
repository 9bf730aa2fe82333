"""YAML frontmatter parsing utilities.

Agent and command files carry their metadata as YAML frontmatter delimited
by '---' markers at the start of the file.

Example:
    ```yaml
    ---
    name: code-reviewer
    description: Reviews pull requests
    tools: Read, Grep
    ---

    You are a meticulous reviewer...
    ```
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict

import yaml


# Regex pattern to match YAML frontmatter at the start of a file
# Matches content between the first pair of '---' markers
FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


@dataclass
class ParsedDocument:
    """Result of parsing a document with YAML frontmatter.

    Attributes:
        frontmatter: Parsed YAML frontmatter as a dictionary
        content: The markdown content after the frontmatter
        raw_frontmatter: The raw YAML string (for debugging)
    """
    frontmatter: Dict[str, Any]
    content: str
    raw_frontmatter: str


def parse_frontmatter(content: str) -> ParsedDocument:
    """Parse YAML frontmatter from markdown content.

    Args:
        content: Full markdown content including frontmatter

    Returns:
        ParsedDocument with frontmatter dict, content, and raw YAML

    Raises:
        ValueError: If the YAML is invalid or not a mapping

    Example:
        >>> doc = parse_frontmatter('''---
        ... name: reviewer
        ... ---
        ... Body''')
        >>> doc.frontmatter['name']
        'reviewer'
        >>> doc.content
        'Body'
    """
    match = FRONTMATTER_PATTERN.match(content)

    if not match:
        return ParsedDocument(frontmatter={}, content=content, raw_frontmatter="")

    raw_yaml = match.group(1)
    remaining_content = content[match.end():]

    try:
        parsed = yaml.safe_load(raw_yaml)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in frontmatter: {e}") from e
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Frontmatter must be a YAML mapping, got {type(parsed).__name__}")

    return ParsedDocument(
        frontmatter=parsed,
        content=remaining_content,
        raw_frontmatter=raw_yaml,
    )


def format_frontmatter(data: Dict[str, Any], *, exclude_none: bool = True) -> str:
    """Format a dictionary as YAML frontmatter wrapped in '---' delimiters.

    Example:
        >>> print(format_frontmatter({'name': 'reviewer', 'tools': ['Read']}))
        ---
        name: reviewer
        tools:
        - Read
        ---
        <BLANKLINE>
    """
    if exclude_none:
        data = {k: v for k, v in data.items() if v is not None}

    yaml_content = yaml.safe_dump(
        data,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,  # Preserve insertion order
    )

    return f"---\n{yaml_content}---\n"


def has_frontmatter(content: str) -> bool:
    """Check if content starts with a '---' frontmatter block."""
    return bool(FRONTMATTER_PATTERN.match(content))


__all__ = [
    "ParsedDocument",
    "parse_frontmatter",
    "format_frontmatter",
    "has_frontmatter",
    "FRONTMATTER_PATTERN",
]
