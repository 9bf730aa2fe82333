from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import pytest
import yaml

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'config_composer'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from config_composer.core.utils.logging import reset_logging  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_composer(monkeypatch: pytest.MonkeyPatch):
    """Each test starts without a config overlay and without CLI log handlers."""
    monkeypatch.delenv("CONFIG_COMPOSER_CONFIG", raising=False)
    yield
    reset_logging()


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


BundleFactory = Callable[..., Path]


@pytest.fixture
def make_bundle(tmp_path: Path) -> BundleFactory:
    """Create a configuration bundle directory under ``tmp_path``."""

    def _make(
        dirname: str,
        *,
        claude_md: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        settings: Optional[Any] = None,
        package: Optional[Dict[str, Any]] = None,
        agents: Optional[Dict[str, str]] = None,
        commands: Optional[Dict[str, str]] = None,
        hooks: Optional[Dict[str, str]] = None,
    ) -> Path:
        root = tmp_path / dirname
        root.mkdir(parents=True, exist_ok=True)
        if claude_md is not None:
            _write(root / "CLAUDE.md", claude_md)
        if metadata is not None:
            _write(root / "bundle.yaml", yaml.safe_dump(metadata, sort_keys=False))
        if package is not None:
            _write(root / "package.json", json.dumps(package))
        if settings is not None:
            text = settings if isinstance(settings, str) else json.dumps(settings)
            _write(root / ".claude" / "settings.json", text)
        for name, text in (agents or {}).items():
            _write(root / ".claude" / "agents" / name, text)
        for name, text in (commands or {}).items():
            _write(root / ".claude" / "commands" / name, text)
        for name, text in (hooks or {}).items():
            _write(root / ".claude" / "hooks" / name, text)
        return root

    return _make
