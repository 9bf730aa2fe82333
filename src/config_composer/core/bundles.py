"""Read configuration bundle directories.

A bundle directory looks like::

    nextjs-15/
        bundle.yaml            # optional metadata (name, version, sections...)
        CLAUDE.md              # optional project guidance document
        package.json           # optional; engines / peerDependencies
        .claude/
            settings.json
            agents/*.md
            commands/*.md
            hooks/*.{json,sh,js}

Only this module and the CLI touch the filesystem; everything it returns is
plain data ready for the merge engines.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

import yaml

from config_composer.core.components import (
    Agent,
    Command,
    Hook,
    Settings,
    parse_agent,
    parse_command,
    parse_hook,
)
from config_composer.core.composition.diagnostics import (
    BUNDLE_READ_FAILED,
    ENTITY_PARSE_FAILED,
    Diagnostics,
)
from config_composer.core.exceptions import BundleLoadError, EntityParseError
from config_composer.core.schemas import validate_bundle_metadata
from config_composer.core.utils.io import PathLike, read_json, read_text

logger = logging.getLogger(__name__)

METADATA_FILE = "bundle.yaml"
DOCUMENT_FILE = "CLAUDE.md"
PACKAGE_FILE = "package.json"
CLAUDE_DIR = ".claude"

E = TypeVar("E")


@dataclass
class Bundle:
    """Everything one configuration bundle contributes."""

    name: str
    path: Path
    metadata: Dict[str, Any]
    content: str = ""
    dependencies: Dict[str, Any] = field(default_factory=dict)
    agents: List[Agent] = field(default_factory=list)
    commands: List[Command] = field(default_factory=list)
    hooks: List[Hook] = field(default_factory=list)
    settings: Optional[Settings] = None

    def to_merge_input(self) -> Dict[str, Any]:
        """Record accepted by :meth:`ConfigMerger.merge`."""
        return {
            "content": self.content,
            "metadata": dict(self.metadata),
            "dependencies": dict(self.dependencies),
        }


def _load_metadata(root: Path) -> Dict[str, Any]:
    path = root / METADATA_FILE
    metadata: Dict[str, Any] = {}
    if path.exists():
        try:
            loaded = yaml.safe_load(read_text(path))
        except (OSError, UnicodeDecodeError) as e:
            raise BundleLoadError(f"Cannot read {path}: {e}", path=str(path)) from e
        except yaml.YAMLError as e:
            raise BundleLoadError(f"Invalid YAML in {path}: {e}", path=str(path)) from e
        if loaded is not None and not isinstance(loaded, dict):
            raise BundleLoadError(f"{path} must contain a YAML mapping", path=str(path))
        metadata = dict(loaded or {})
    metadata.setdefault("name", root.name)
    validate_bundle_metadata(metadata)
    return metadata


def _load_dependencies(root: Path, name: str, diagnostics: Diagnostics) -> Dict[str, Any]:
    path = root / PACKAGE_FILE
    try:
        package = read_json(path, default=None)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        diagnostics.warn(BUNDLE_READ_FAILED, f"Ignoring {PACKAGE_FILE}: {e}", source=name)
        return {}
    if not isinstance(package, dict):
        return {}
    return {
        key: dict(package[key])
        for key in ("engines", "peerDependencies")
        if isinstance(package.get(key), dict)
    }


def _load_settings(claude_dir: Path) -> Optional[Settings]:
    path = claude_dir / "settings.json"
    try:
        raw = read_json(path, default=None)
    except json.JSONDecodeError as e:
        raise BundleLoadError(f"Invalid JSON in {path}: {e}", path=str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise BundleLoadError(f"Cannot read {path}: {e}", path=str(path)) from e
    return None if raw is None else Settings.from_dict(raw)


def _load_entities(
    directory: Path,
    parse: Callable[[Path, str], Optional[E]],
    *,
    pattern: str,
    source: str,
    diagnostics: Diagnostics,
) -> List[E]:
    entities: List[E] = []
    if not directory.is_dir():
        return entities
    for path in sorted(p for p in directory.glob(pattern) if p.is_file()):
        try:
            entity = parse(path, read_text(path))
        except EntityParseError as e:
            diagnostics.warn(ENTITY_PARSE_FAILED, str(e), source=source)
            continue
        except (OSError, UnicodeDecodeError) as e:
            diagnostics.warn(BUNDLE_READ_FAILED, f"Cannot read {path.name}: {e}", source=source)
            continue
        if entity is not None:
            entities.append(entity)
    return entities


def load_bundle(path: PathLike, *, diagnostics: Optional[Diagnostics] = None) -> Bundle:
    """Load one bundle directory.

    Raises:
        BundleLoadError: the directory is missing, or CLAUDE.md, bundle.yaml
            or settings.json cannot be read or decoded.
        ValidationError: bundle metadata or settings have the wrong shape.
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    root = Path(path).expanduser()
    if not root.is_dir():
        raise BundleLoadError(f"Configuration directory not found: {root}", path=str(root))

    metadata = _load_metadata(root)
    name = str(metadata["name"])

    content = ""
    document = root / DOCUMENT_FILE
    if document.exists():
        try:
            content = read_text(document)
        except (OSError, UnicodeDecodeError) as e:
            raise BundleLoadError(f"Cannot read {document}: {e}", path=str(document)) from e

    claude_dir = root / CLAUDE_DIR
    bundle = Bundle(
        name=name,
        path=root,
        metadata=metadata,
        content=content,
        dependencies=_load_dependencies(root, name, diagnostics),
        settings=_load_settings(claude_dir),
        agents=_load_entities(
            claude_dir / "agents",
            lambda p, text: parse_agent(text, p.name, name),
            pattern="*.md",
            source=name,
            diagnostics=diagnostics,
        ),
        commands=_load_entities(
            claude_dir / "commands",
            lambda p, text: parse_command(text, p.name, name),
            pattern="*.md",
            source=name,
            diagnostics=diagnostics,
        ),
        hooks=_load_entities(
            claude_dir / "hooks",
            lambda p, text: parse_hook(p.name, text, name),
            pattern="*",
            source=name,
            diagnostics=diagnostics,
        ),
    )
    logger.debug(
        "Loaded bundle %s: %d agents, %d commands, %d hooks",
        name,
        len(bundle.agents),
        len(bundle.commands),
        len(bundle.hooks),
    )
    return bundle


def load_bundles(paths: List[PathLike], *, diagnostics: Optional[Diagnostics] = None) -> List[Bundle]:
    """Load several bundles in the given order."""
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    return [load_bundle(p, diagnostics=diagnostics) for p in paths]


__all__ = ["Bundle", "load_bundle", "load_bundles"]
