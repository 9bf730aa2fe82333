from __future__ import annotations

import pytest

from config_composer.core.components import (
    Agent,
    Command,
    HookType,
    parse_agent,
    parse_command,
    parse_hook,
    render_agent,
    render_command,
)
from config_composer.core.exceptions import EntityParseError

AGENT_FILE = """---
name: code-reviewer
description: Reviews pull requests
tools: Read, Grep ,  
---

You are a meticulous reviewer.
"""


def test_parse_agent_reads_frontmatter() -> None:
    agent = parse_agent(AGENT_FILE, "code-reviewer.md", "nextjs")

    assert agent == Agent(
        name="code-reviewer",
        description="Reviews pull requests",
        tools=("Read", "Grep"),
        content="You are a meticulous reviewer.",
        source="nextjs",
    )


def test_parse_agent_without_frontmatter_uses_filename() -> None:
    agent = parse_agent("Just a body.\n", "helper.md", "b")
    assert (agent.name, agent.description, agent.tools, agent.content) == ("helper", "", (), "Just a body.")


def test_parse_agent_accepts_tool_lists() -> None:
    agent = parse_agent("---\nname: a\ntools: [Read, '', Write]\n---\nbody", "a.md", "s")
    assert agent.tools == ("Read", "Write")


@pytest.mark.parametrize(
    "text",
    [
        "---\nname: a\ntools: 3\n---\nbody",
        "---\nname: [unclosed\n---\nbody",
        "---\n- just\n- a list\n---\nbody",
        "---\nname: '  '\n---\nbody",
    ],
)
def test_parse_agent_errors(text: str) -> None:
    with pytest.raises(EntityParseError) as excinfo:
        parse_agent(text, "bad.md", "s")
    assert excinfo.value.context["filename"] == "bad.md"


def test_parse_command_reads_command_fields() -> None:
    text = "---\ndescription: Run tests\nallowed-tools: [Bash]\nargument-hint: '[file]'\n---\nRun `npm test $ARGUMENTS`."
    command = parse_command(text, "test.md", "nextjs")

    assert command == Command(
        name="test",
        description="Run tests",
        allowed_tools=("Bash",),
        argument_hint="[file]",
        content="Run `npm test $ARGUMENTS`.",
        source="nextjs",
    )


def test_parse_hook_by_extension() -> None:
    config = parse_hook("format.json", '{"description": "Format on save"}', "a")
    assert config is not None
    assert config.type is HookType.CONFIG
    assert config.description == "Format on save"

    script = parse_hook("lint.sh", "#!/bin/sh\nnpm run lint\n", "a")
    assert script is not None
    assert script.type is HookType.SCRIPT
    assert script.name == "lint.sh"

    assert parse_hook("README.md", "docs", "a") is None

    with pytest.raises(EntityParseError):
        parse_hook("broken.json", "{not json", "a")


def test_render_agent_writes_frontmatter_then_body() -> None:
    agent = Agent("reviewer", "Reviews code", ("Read",), "Body text", "a")
    text = render_agent(agent)

    assert text == "---\nname: reviewer\ndescription: Reviews code\ntools:\n- Read\n---\n\nBody text\n"
    assert parse_agent(text, "reviewer.md", "a") == agent


def test_render_command_omits_empty_optional_fields() -> None:
    text = render_command(Command("lint", "Run lint", content="npm run lint"))
    assert "allowed-tools" not in text
    assert "argument-hint" not in text

    full = render_command(Command("test", "Run tests", ("Bash",), "[file]", "npm test"))
    assert "allowed-tools:\n- Bash\n" in full
    assert "argument-hint: '[file]'\n" in full
