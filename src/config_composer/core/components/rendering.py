"""Render merged agents and commands back to frontmatter files."""
from __future__ import annotations

from typing import Any, Dict

from config_composer.core.utils.text import format_frontmatter
from .models import Agent, Command


def render_agent(agent: Agent) -> str:
    frontmatter: Dict[str, Any] = {
        "name": agent.name,
        "description": agent.description,
        "tools": list(agent.tools),
    }
    return f"{format_frontmatter(frontmatter)}\n{agent.content}\n"


def render_command(command: Command) -> str:
    frontmatter: Dict[str, Any] = {"name": command.name, "description": command.description}
    if command.allowed_tools:
        frontmatter["allowed-tools"] = list(command.allowed_tools)
    if command.argument_hint:
        frontmatter["argument-hint"] = command.argument_hint
    return f"{format_frontmatter(frontmatter)}\n{command.content}\n"


__all__ = ["render_agent", "render_command"]
