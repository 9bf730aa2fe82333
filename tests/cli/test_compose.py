from __future__ import annotations

import json
from pathlib import Path

import pytest

from config_composer.cli._dispatcher import build_parser, discover_commands, main

AGENT = "---\nname: reviewer\ndescription: {desc}\ntools: {tools}\n---\n\n{body}\n"


@pytest.fixture
def two_bundles(make_bundle):
    first = make_bundle(
        "nextjs",
        claude_md="# Next.js\n\n## Testing\n\n- Use Playwright\n- Run tests in CI\n",
        metadata={"name": "nextjs-15", "version": "15.0.0"},
        settings={
            "permissions": {"allow": ["Bash(npm test)", "Read"]},
            "env": {"NODE_ENV": "development"},
            "hooks": {"PostToolUse": [{"matcher": "Write", "hooks": [{"type": "command", "command": "prettier"}]}]},
        },
        agents={"reviewer.md": AGENT.format(desc="Next reviewer", tools="Read", body="Check routes.")},
        commands={"test.md": "---\ndescription: Next tests\n---\nnext test\n"},
    )
    second = make_bundle(
        "shadcn",
        claude_md="## Testing\n\n- Run tests in CI\n- Snapshot components\n",
        settings={
            "permissions": {"allow": ["Read", "Bash(npx shadcn)"], "deny": ["Bash(rm -rf)"]},
            "env": {"NODE_ENV": "test"},
            "hooks": {"PostToolUse": [{"hooks": [{"type": "command", "command": "eslint --fix"}]}]},
        },
        agents={"reviewer.md": AGENT.format(desc="UI reviewer", tools="Read, Grep", body="Check components.")},
        commands={"test.md": "---\ndescription: UI tests\n---\nvitest\n"},
    )
    return str(first), str(second)


def test_commands_are_discovered() -> None:
    assert set(discover_commands("compose")) == {"claude_md", "components", "settings"}
    args = build_parser().parse_args(["compose", "claude-md", "a", "b"])
    assert args.bundles == ["a", "b"]


def test_no_arguments_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "config-composer" in capsys.readouterr().out


def test_claude_md_to_stdout(two_bundles, capsys) -> None:
    assert main(["compose", "claude-md", *two_bundles]) == 0

    out = capsys.readouterr().out
    assert out.startswith("# Composed Claude Code Configuration")
    assert "This configuration combines: nextjs-15, shadcn" in out
    assert out.count("Run tests in CI") == 1
    assert "## Configuration Metadata" in out


def test_claude_md_to_file(two_bundles, tmp_path: Path, capsys) -> None:
    target = tmp_path / "out" / "CLAUDE.md"

    assert main(["compose", "claude_md", *two_bundles, "--output", str(target)]) == 0

    assert "Merged 2 configuration(s)" in capsys.readouterr().out
    text = target.read_text(encoding="utf-8")
    assert "Snapshot components" in text
    assert text.endswith("\n")


def test_claude_md_json(two_bundles, capsys) -> None:
    assert main(["compose", "claude-md", *two_bundles, "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["sources"] == ["nextjs-15", "shadcn"]
    assert payload["output"] is None
    assert "Snapshot components" in payload["content"]
    assert payload["warnings"] == []


def test_claude_md_json_reports_merge_warnings(make_bundle, capsys) -> None:
    root = make_bundle("intro", claude_md="Read this first.\n\n## Usage\nRun it.\n")

    assert main(["compose", "claude-md", str(root), "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["warnings"] == ["[intro] Text before the first heading is kept as 'Project Context'"]
    assert "Read this first." in payload["content"]


def test_settings_merge(two_bundles, capsys) -> None:
    assert main(["compose", "settings", *two_bundles]) == 0

    settings = json.loads(capsys.readouterr().out)
    assert settings["permissions"] == {
        "allow": ["Bash(npm test)", "Read", "Bash(npx shadcn)"],
        "deny": ["Bash(rm -rf)"],
    }
    assert settings["env"] == {"NODE_ENV": "test"}
    assert [entry.get("matcher") for entry in settings["hooks"]["PostToolUse"]] == ["Write", None]


def test_settings_to_file(two_bundles, tmp_path: Path, capsys) -> None:
    target = tmp_path / "settings.json"

    assert main(["compose", "settings", *two_bundles, "--output", str(target)]) == 0

    assert "Wrote merged settings" in capsys.readouterr().out
    assert json.loads(target.read_text(encoding="utf-8"))["env"] == {"NODE_ENV": "test"}


def test_components_json(two_bundles, capsys) -> None:
    assert main(["compose", "components", *two_bundles, "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    [agent] = payload["agents"]
    assert agent["name"] == "reviewer"
    assert agent["tools"] == ["Read", "Grep"]
    assert agent["source"] == "nextjs-15 + shadcn"
    assert "### From shadcn:" in agent["file"]
    [command] = payload["commands"]
    assert command["description"] == "UI tests"
    assert command["source"] == "shadcn"
    assert payload["hooks"] == []


def test_components_text_reports_skipped_files(make_bundle, capsys) -> None:
    root = make_bundle("solo", agents={"bad.md": "---\nname: [oops\n---\n"})

    assert main(["compose", "components", str(root)]) == 0

    captured = capsys.readouterr()
    assert "Agents (0):" in captured.out
    assert "Warning: [solo]" in captured.err


def test_missing_bundle_fails(tmp_path: Path, capsys) -> None:
    assert main(["compose", "claude-md", str(tmp_path / "absent")]) == 1
    assert "Error: Configuration directory not found" in capsys.readouterr().err


def test_missing_bundle_fails_with_json_error(tmp_path: Path, capsys) -> None:
    assert main(["compose", "settings", str(tmp_path / "absent"), "--json"]) == 1

    payload = json.loads(capsys.readouterr().err)
    assert payload["error"] == "compose_settings_error"
    assert payload["code"] == "BundleLoadError"
    assert payload["context"]["path"].endswith("absent")


def test_bundle_without_content_fails(make_bundle, capsys) -> None:
    root = make_bundle("empty")
    assert main(["compose", "claude-md", str(root)]) == 1
    assert "no mergeable content" in capsys.readouterr().err
