"""Shared setup for compose subcommands.

Every compose command configures logging from its flags, resolves the
composer configuration and loads the bundle directories it was given, in
the order given.
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from config_composer.core.bundles import Bundle, load_bundles
from config_composer.core.composition.diagnostics import Diagnostics
from config_composer.core.config import ComposerConfig, load_composer_config
from config_composer.core.utils.io import write_text
from config_composer.core.utils.logging import configure_logging

logger = logging.getLogger(__name__)


@dataclass
class ComposeContext:
    config: ComposerConfig
    bundles: List[Bundle]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def build_compose_context(args: argparse.Namespace) -> ComposeContext:
    """Configure logging and load config + bundles from parsed CLI args.

    Raises:
        ComposerError: the config overlay or a bundle cannot be loaded.
    """
    log_file = getattr(args, "log_file", None)
    configure_logging(
        level="DEBUG" if getattr(args, "verbose", False) else "WARNING",
        log_path=Path(log_file).expanduser() if log_file else None,
    )
    config = load_composer_config(getattr(args, "config", None))
    diagnostics = Diagnostics()
    bundles = load_bundles(list(args.bundles), diagnostics=diagnostics)
    logger.debug("Loaded %d bundles: %s", len(bundles), [b.name for b in bundles])
    return ComposeContext(config=config, bundles=bundles, diagnostics=diagnostics)


def write_output(path: str, content: str) -> Path:
    """Write command output to ``path`` atomically and return the resolved path."""
    target = Path(path).expanduser()
    write_text(target, content if content.endswith("\n") else content + "\n")
    return target


__all__ = ["ComposeContext", "build_compose_context", "write_output"]
