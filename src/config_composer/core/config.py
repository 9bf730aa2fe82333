"""Composer configuration.

Defaults live in ``config_composer/data/config/composer.yaml``. An optional
YAML overlay (explicit path, else ``$CONFIG_COMPOSER_CONFIG``) is deep-merged
on top, so overlays can append title synonyms and section order patterns.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from config_composer.core.exceptions import ConfigurationError
from config_composer.core.utils.merge import deep_merge
from config_composer.data import read_yaml

logger = logging.getLogger(__name__)

OVERLAY_ENV_VAR = "CONFIG_COMPOSER_CONFIG"


@dataclass(frozen=True)
class TitleSynonym:
    """A normalized title containing ``phrase`` collapses to ``canonical``."""

    phrase: str
    canonical: str


@dataclass(frozen=True)
class ComposerConfig:
    """Resolved composer settings (immutable)."""

    document_title: str
    generator_name: str
    generator_version: str
    context_framing: str
    title_synonyms: Tuple[TitleSynonym, ...]
    section_order: Tuple[str, ...]
    compatibility_notes: Tuple[str, ...]

    @property
    def generator_label(self) -> str:
        return f"{self.generator_name} v{self.generator_version}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ComposerConfig":
        """Build a config from the mapping under the ``composer:`` key."""
        generator = data.get("generator") or {}
        synonyms = []
        for raw in data.get("title_synonyms") or []:
            if not isinstance(raw, Mapping) or not raw.get("phrase") or not raw.get("canonical"):
                raise ConfigurationError(
                    f"title_synonyms entries need 'phrase' and 'canonical': {raw!r}"
                )
            synonyms.append(
                TitleSynonym(phrase=str(raw["phrase"]).lower(), canonical=str(raw["canonical"]).lower())
            )
        return cls(
            document_title=str(data.get("document_title") or "Composed Configuration"),
            generator_name=str(generator.get("name") or "config-composer"),
            generator_version=str(generator.get("version") or "0"),
            context_framing=str(data.get("context_framing") or ""),
            title_synonyms=tuple(synonyms),
            section_order=tuple(str(p).lower() for p in data.get("section_order") or []),
            compatibility_notes=tuple(str(n) for n in data.get("compatibility_notes") or []),
        )


def _load_overlay(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(
            f"Composer config overlay not found: {path}", context={"path": str(path)}
        )
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in composer config overlay {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Composer config overlay must be a YAML mapping: {path}")
    return data


def load_composer_config(overlay_path: Optional[Path | str] = None) -> ComposerConfig:
    """Load bundled defaults and apply an optional overlay file."""
    merged: Dict[str, Any] = dict(read_yaml("config", "composer.yaml"))

    if overlay_path is None and os.environ.get(OVERLAY_ENV_VAR):
        overlay_path = os.environ[OVERLAY_ENV_VAR]
    if overlay_path is not None:
        logger.debug("Applying composer config overlay %s", overlay_path)
        merged = deep_merge(merged, _load_overlay(Path(overlay_path).expanduser()))

    section = merged.get("composer")
    if not isinstance(section, dict):
        raise ConfigurationError("Composer configuration is missing the 'composer' section")
    return ComposerConfig.from_dict(section)


@lru_cache(maxsize=1)
def default_config() -> ComposerConfig:
    """Bundled defaults only (cached; ignores the environment overlay)."""
    section = read_yaml("config", "composer.yaml").get("composer") or {}
    return ComposerConfig.from_dict(section)


__all__ = [
    "ComposerConfig",
    "TitleSynonym",
    "OVERLAY_ENV_VAR",
    "load_composer_config",
    "default_config",
]
