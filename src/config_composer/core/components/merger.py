"""Merge agents, commands, hooks and settings across bundles.

Each ``merge_*`` method takes one list per bundle, in bundle order:

- agents with the same normalized name are combined (tools unioned, bodies
  kept side by side under "From <source>" headings)
- commands and hooks with the same normalized name are replaced; the last
  bundle wins, but the entity keeps the position where its name first
  appeared
- settings merge part by part (see :meth:`ComponentMerger.merge_settings`)
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar, Union

from config_composer.core.composition.diagnostics import HOOK_EVENT_UNRECOGNIZED, Diagnostics
from config_composer.core.exceptions import ConfigurationError
from config_composer.core.utils.merge import dedupe, deep_merge
from .models import Agent, Command, Hook, Permissions, Settings

logger = logging.getLogger(__name__)

_NON_KEY_CHARS = re.compile(r"[^a-z0-9]")

T = TypeVar("T", Command, Hook)


def normalize_key(name: str) -> str:
    """Comparison key for entity names: lower-case alphanumerics only.

    Example:
        >>> normalize_key("Code-Reviewer")
        'codereviewer'
    """
    key = _NON_KEY_CHARS.sub("", name.lower())
    return key or name.strip().lower()


def _flatten(groups: Optional[Iterable[Optional[Iterable[Any]]]]) -> Iterable[Any]:
    for group in groups or []:
        for item in group or []:
            yield item


class ComponentMerger:
    """Combine the named entities and settings of several bundles."""

    def __init__(self, diagnostics: Optional[Diagnostics] = None) -> None:
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    # ----- Agents -----
    def merge_agents(self, agent_groups: Sequence[Sequence[Agent]]) -> List[Agent]:
        """Combine agents sharing a name; output keeps first-seen name order."""
        members: Dict[str, List[Agent]] = {}
        for agent in _flatten(agent_groups):
            members.setdefault(normalize_key(agent.name), []).append(agent)
        merged = [self._combine_agents(group) for group in members.values()]
        logger.debug("Merged agents: %s", [a.name for a in merged])
        return merged

    @staticmethod
    def _combine_agents(agents: List[Agent]) -> Agent:
        if len(agents) == 1:
            return agents[0]

        first = agents[0]
        description = next((a.description for a in reversed(agents) if a.description), "")
        lines = [
            f"# {first.name}",
            "",
            description,
            "",
            "## Combined expertise from multiple configurations",
        ]
        for agent in agents:
            lines.extend(["", f"### From {agent.source}:", agent.content])

        return Agent(
            name=first.name,
            description=description,
            tools=tuple(dedupe([tool for a in agents for tool in a.tools])),
            content="\n".join(lines),
            source=" + ".join(dedupe([a.source for a in agents])),
        )

    # ----- Commands and hooks -----
    def merge_commands(self, command_groups: Sequence[Sequence[Command]]) -> List[Command]:
        """Later commands replace earlier ones with the same name."""
        return self._last_wins(command_groups)

    def merge_hooks(self, hook_groups: Sequence[Sequence[Hook]]) -> List[Hook]:
        """Later hooks replace earlier ones with the same name."""
        return self._last_wins(hook_groups)

    @staticmethod
    def _last_wins(groups: Sequence[Sequence[T]]) -> List[T]:
        winners: Dict[str, T] = {}
        for entity in _flatten(groups):
            key = normalize_key(entity.name)
            if key in winners:
                logger.debug("%s %r overrides %s", type(entity).__name__, entity.name, winners[key].source)
            winners[key] = entity
        return list(winners.values())

    # ----- Settings -----
    def merge_settings(
        self, settings_list: Sequence[Optional[Union[Settings, Mapping[str, Any]]]]
    ) -> Settings:
        """Merge settings objects in bundle order; ``None`` entries are skipped.

        - permission lists concatenate and are deduplicated (first-seen order)
        - ``env`` merges key by key, later bundles winning
        - hook-trigger entries concatenate per lifecycle event
        - the status line is replaced whole by the last bundle that sets one
        - every other key deep-merges (mappings recurse, lists concatenate,
          scalars take the later value)
        """
        merged = Settings()
        allow: List[str] = []
        deny: List[str] = []
        ask: List[str] = []

        for index, raw in enumerate(settings_list or []):
            if raw is None:
                continue
            if isinstance(raw, Settings):
                settings = raw
            elif isinstance(raw, Mapping):
                settings = Settings.from_dict(raw)
            else:
                raise ConfigurationError(
                    f"Settings #{index} must be a Settings object or mapping",
                    context={"type": type(raw).__name__},
                )

            allow.extend(settings.permissions.allow)
            deny.extend(settings.permissions.deny)
            ask.extend(settings.permissions.ask)
            merged.env.update(settings.env)

            for event, entries in settings.hooks.items():
                merged.hooks.setdefault(event, []).extend(entries)
            for name, entries in settings.unrecognized_hooks.items():
                self.diagnostics.warn(
                    HOOK_EVENT_UNRECOGNIZED,
                    f"Hook event {name!r} is not a known lifecycle event; passing it through",
                    source=f"settings #{index}",
                )
                merged.unrecognized_hooks.setdefault(name, []).extend(entries)

            if settings.status_line is not None:
                merged.status_line = settings.status_line
            merged.extra = deep_merge(merged.extra, settings.extra)

        merged.permissions = Permissions(allow=dedupe(allow), deny=dedupe(deny), ask=dedupe(ask))
        return merged


__all__ = ["ComponentMerger", "normalize_key"]
