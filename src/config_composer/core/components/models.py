"""Named entities and settings records merged by :class:`ComponentMerger`.

Agents, commands and hooks are immutable value objects. ``Settings`` turns
the loosely shaped ``settings.json`` payload into explicit parts: the
permission lists, the environment map, the hook-trigger table keyed by
:class:`LifecycleEvent`, the status line, and everything else. Hook events
outside the known set are kept verbatim in ``unrecognized_hooks`` rather
than dropped.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from config_composer.core.exceptions import ValidationError


class HookType(str, Enum):
    """Whether a hook file is an executable script or a JSON trigger config."""

    SCRIPT = "script"
    CONFIG = "config"


class LifecycleEvent(str, Enum):
    """Hook lifecycle events understood by Claude Code settings."""

    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    STOP = "Stop"
    USER_PROMPT_SUBMIT = "UserPromptSubmit"
    NOTIFICATION = "Notification"
    SUBAGENT_STOP = "SubagentStop"
    SESSION_END = "SessionEnd"
    SESSION_START = "SessionStart"
    PRE_COMPACT = "PreCompact"

    @classmethod
    def lookup(cls, name: str) -> Optional["LifecycleEvent"]:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class Agent:
    """Sub-agent definition (``.claude/agents/<name>.md``)."""

    name: str
    description: str = ""
    tools: Tuple[str, ...] = ()
    content: str = ""
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "tools": list(self.tools),
            "content": self.content,
            "source": self.source,
        }


@dataclass(frozen=True)
class Command:
    """Slash command definition (``.claude/commands/<name>.md``)."""

    name: str
    description: str = ""
    allowed_tools: Tuple[str, ...] = ()
    argument_hint: Optional[str] = None
    content: str = ""
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "allowed_tools": list(self.allowed_tools),
            "argument_hint": self.argument_hint,
            "content": self.content,
            "source": self.source,
        }


@dataclass(frozen=True)
class Hook:
    """Hook file shipped by a bundle (``.claude/hooks/*``)."""

    name: str
    type: HookType
    content: str = ""
    source: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.value,
            "description": self.description,
            "content": self.content,
            "source": self.source,
        }


# ---------- Settings ----------
@dataclass(frozen=True)
class HookCommand:
    command: str
    type: str = "command"
    timeout: Optional[int] = None

    @classmethod
    def from_value(cls, raw: Any) -> Optional["HookCommand"]:
        if not isinstance(raw, Mapping) or not isinstance(raw.get("command"), str):
            return None
        timeout = raw.get("timeout")
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            timeout = None
        return cls(command=raw["command"], type=str(raw.get("type") or "command"), timeout=timeout)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type, "command": self.command}
        if self.timeout:
            data["timeout"] = self.timeout
        return data


@dataclass(frozen=True)
class HookEntry:
    """One matcher plus the commands it triggers."""

    hooks: Tuple[HookCommand, ...]
    matcher: Optional[str] = None

    @classmethod
    def from_value(cls, raw: Any) -> Optional["HookEntry"]:
        """Parse one entry; None when it has no ``hooks`` list."""
        if not isinstance(raw, Mapping) or not isinstance(raw.get("hooks"), list):
            return None
        commands = tuple(c for c in map(HookCommand.from_value, raw["hooks"]) if c is not None)
        matcher = raw.get("matcher")
        return cls(hooks=commands, matcher=matcher if isinstance(matcher, str) and matcher else None)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.matcher:
            data["matcher"] = self.matcher
        data["hooks"] = [c.to_dict() for c in self.hooks]
        return data


@dataclass(frozen=True)
class StatusLine:
    """Opaque status-line command; never merged, only replaced."""

    command: str
    type: str = "command"
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_value(cls, raw: Any) -> Optional["StatusLine"]:
        if isinstance(raw, str):
            return cls(command=raw) if raw else None
        if not isinstance(raw, Mapping) or not raw:
            return None
        extra = {k: v for k, v in raw.items() if k not in ("type", "command")}
        return cls(command=str(raw.get("command") or ""), type=str(raw.get("type") or "command"), extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "command": self.command, **self.extra}


@dataclass
class Permissions:
    allow: List[str] = field(default_factory=list)
    deny: List[str] = field(default_factory=list)
    ask: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        data = {"allow": list(self.allow), "deny": list(self.deny)}
        if self.ask:
            data["ask"] = list(self.ask)
        return data


def _string_list(raw: Any, label: str) -> List[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError(f"settings {label} must be a list of strings")
    return [str(item) for item in raw]


@dataclass
class Settings:
    """Typed view of one bundle's ``settings.json``."""

    permissions: Permissions = field(default_factory=Permissions)
    env: Dict[str, str] = field(default_factory=dict)
    hooks: Dict[LifecycleEvent, List[HookEntry]] = field(default_factory=dict)
    unrecognized_hooks: Dict[str, List[Any]] = field(default_factory=dict)
    status_line: Optional[StatusLine] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Settings":
        """Build settings from a decoded ``settings.json`` payload.

        Root-level ``allow``/``deny`` lists (the older layout) are folded
        into ``permissions``. Malformed hook entries are dropped.

        Raises:
            ValidationError: ``raw`` is not a mapping, or a permission list,
                ``env`` or ``hooks`` has the wrong shape.
        """
        if not isinstance(raw, Mapping):
            raise ValidationError(f"settings must be a JSON object, got {type(raw).__name__}")

        perms_raw = raw.get("permissions") or {}
        if not isinstance(perms_raw, Mapping):
            raise ValidationError("settings permissions must be an object")
        permissions = Permissions(
            allow=_string_list(perms_raw.get("allow"), "permissions.allow")
            + _string_list(raw.get("allow"), "allow"),
            deny=_string_list(perms_raw.get("deny"), "permissions.deny")
            + _string_list(raw.get("deny"), "deny"),
            ask=_string_list(perms_raw.get("ask"), "permissions.ask"),
        )

        env_raw = raw.get("env") or {}
        if not isinstance(env_raw, Mapping):
            raise ValidationError("settings env must be an object")

        hooks_raw = raw.get("hooks") or {}
        if not isinstance(hooks_raw, Mapping):
            raise ValidationError("settings hooks must be an object keyed by event name")
        hooks: Dict[LifecycleEvent, List[HookEntry]] = {}
        unrecognized: Dict[str, List[Any]] = {}
        for name, entries in hooks_raw.items():
            event = LifecycleEvent.lookup(str(name))
            if event is None:
                unrecognized[str(name)] = list(entries) if isinstance(entries, list) else [entries]
                continue
            if not isinstance(entries, list):
                continue
            parsed = [e for e in map(HookEntry.from_value, entries) if e is not None]
            if parsed:
                hooks[event] = parsed

        reserved = {"permissions", "allow", "deny", "env", "hooks", "statusLine"}
        return cls(
            permissions=permissions,
            env={str(k): str(v) for k, v in env_raw.items()},
            hooks=hooks,
            unrecognized_hooks=unrecognized,
            status_line=StatusLine.from_value(raw.get("statusLine")),
            extra={k: v for k, v in raw.items() if k not in reserved},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the ``settings.json`` layout."""
        data: Dict[str, Any] = {"permissions": self.permissions.to_dict()}
        if self.env:
            data["env"] = dict(self.env)
        hooks: Dict[str, Any] = {}
        for event in LifecycleEvent:
            if self.hooks.get(event):
                hooks[event.value] = [entry.to_dict() for entry in self.hooks[event]]
        for name, entries in self.unrecognized_hooks.items():
            hooks[name] = list(entries)
        if hooks:
            data["hooks"] = hooks
        if self.status_line is not None:
            data["statusLine"] = self.status_line.to_dict()
        data.update(self.extra)
        return data


__all__ = [
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
]
