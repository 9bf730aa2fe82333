"""Named-entity pipeline: agents, commands, hooks and settings."""
from __future__ import annotations

from .merger import ComponentMerger, normalize_key
from .models import (
    Agent,
    Command,
    Hook,
    HookCommand,
    HookEntry,
    HookType,
    LifecycleEvent,
    Permissions,
    Settings,
    StatusLine,
)
from .parsing import parse_agent, parse_command, parse_hook
from .rendering import render_agent, render_command

__all__ = [
    "ComponentMerger",
    "normalize_key",
    "Agent",
    "Command",
    "Hook",
    "HookType",
    "LifecycleEvent",
    "HookCommand",
    "HookEntry",
    "StatusLine",
    "Permissions",
    "Settings",
    "parse_agent",
    "parse_command",
    "parse_hook",
    "render_agent",
    "render_command",
]
