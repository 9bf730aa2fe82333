"""Parse agent, command and hook files into entity records.

Agent and command files are markdown with optional YAML frontmatter::

    ---
    name: code-reviewer
    description: Reviews pull requests
    tools: Read, Grep, Glob
    ---

    You are a meticulous reviewer...

Hook files are either JSON trigger configs or shell/JS scripts.
"""
from __future__ import annotations

import json
from pathlib import PurePath
from typing import Any, Dict, Optional, Tuple

from config_composer.core.exceptions import EntityParseError
from config_composer.core.utils.text import parse_frontmatter
from .models import Agent, Command, Hook, HookType

SCRIPT_SUFFIXES = (".sh", ".js")
CONFIG_SUFFIXES = (".json",)


def _split(text: str, filename: str, kind: str) -> Tuple[Dict[str, Any], str]:
    if not isinstance(text, str):
        raise EntityParseError(f"Invalid content for {kind} {filename}", filename=filename)
    try:
        doc = parse_frontmatter(text)
    except ValueError as e:
        raise EntityParseError(f"Invalid frontmatter in {kind} {filename}: {e}", filename=filename) from e
    return doc.frontmatter, doc.content.strip()


def _name(meta: Dict[str, Any], filename: str, kind: str) -> str:
    raw = meta.get("name")
    name = str(raw).strip() if raw is not None else PurePath(filename).stem
    if not name:
        raise EntityParseError(f"{kind.capitalize()} {filename} has an empty name", filename=filename)
    return name


def _tool_list(raw: Any, filename: str, field_name: str) -> Tuple[str, ...]:
    """Accept ``"Read, Write"`` or ``["Read", "Write"]``."""
    if raw is None:
        return ()
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, list) and all(isinstance(item, str) for item in raw):
        items = raw
    else:
        raise EntityParseError(
            f"'{field_name}' in {filename} must be a string or a list of strings",
            filename=filename,
        )
    return tuple(item.strip() for item in items if item.strip())


def parse_agent(text: str, filename: str, source: str) -> Agent:
    """Parse one ``.claude/agents/*.md`` file.

    Raises:
        EntityParseError: bad frontmatter, empty name or malformed ``tools``.
    """
    meta, body = _split(text, filename, "agent")
    return Agent(
        name=_name(meta, filename, "agent"),
        description=str(meta.get("description") or ""),
        tools=_tool_list(meta.get("tools"), filename, "tools"),
        content=body,
        source=source,
    )


def parse_command(text: str, filename: str, source: str) -> Command:
    """Parse one ``.claude/commands/*.md`` file.

    Raises:
        EntityParseError: bad frontmatter, empty name or malformed ``allowed-tools``.
    """
    meta, body = _split(text, filename, "command")
    hint = meta.get("argument-hint")
    return Command(
        name=_name(meta, filename, "command"),
        description=str(meta.get("description") or ""),
        allowed_tools=_tool_list(meta.get("allowed-tools"), filename, "allowed-tools"),
        argument_hint=str(hint) if hint not in (None, "") else None,
        content=body,
        source=source,
    )


def parse_hook(filename: str, text: str, source: str) -> Optional[Hook]:
    """Parse one ``.claude/hooks/*`` file; None for unsupported file types.

    Raises:
        EntityParseError: a ``.json`` hook is not valid JSON.
    """
    suffix = PurePath(filename).suffix.lower()
    if suffix in CONFIG_SUFFIXES:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise EntityParseError(f"Invalid JSON in hook file {filename}: {e}", filename=filename) from e
        description = payload.get("description", "") if isinstance(payload, dict) else ""
        return Hook(
            name=filename,
            type=HookType.CONFIG,
            content=text,
            source=source,
            description=str(description or ""),
        )
    if suffix in SCRIPT_SUFFIXES:
        return Hook(name=filename, type=HookType.SCRIPT, content=text, source=source)
    return None


__all__ = ["parse_agent", "parse_command", "parse_hook", "SCRIPT_SUFFIXES", "CONFIG_SUFFIXES"]
