from __future__ import annotations

import pytest

from config_composer.core.components import Agent, Command, ComponentMerger, Hook, HookType, normalize_key
from config_composer.core.composition.diagnostics import HOOK_EVENT_UNRECOGNIZED
from config_composer.core.exceptions import ConfigurationError


def test_normalize_key() -> None:
    assert normalize_key("Code-Reviewer") == "codereviewer"
    assert normalize_key("code_reviewer") == "codereviewer"
    assert normalize_key("!!!") == "!!!"


def test_agents_with_same_name_are_combined() -> None:
    first = Agent("reviewer", "Reviews code", ("Read", "Grep"), "Body A", "nextjs")
    second = Agent("Reviewer", "Reviews UI code", ("Grep", "Write"), "Body B", "shadcn")

    merged = ComponentMerger().merge_agents([[first], [second]])

    assert len(merged) == 1
    agent = merged[0]
    assert agent.name == "reviewer"
    assert agent.description == "Reviews UI code"
    assert agent.tools == ("Read", "Grep", "Write")
    assert agent.source == "nextjs + shadcn"
    assert "Body A" in agent.content and "Body B" in agent.content
    assert agent.content.startswith("# reviewer\n\nReviews UI code\n\n## Combined expertise from multiple configurations")
    assert "### From nextjs:\nBody A" in agent.content
    assert "### From shadcn:\nBody B" in agent.content


def test_three_way_agent_merge_does_not_nest() -> None:
    groups = [[Agent("helper", content=f"Body {n}", source=n)] for n in ("a", "b", "c")]
    agent = ComponentMerger().merge_agents(groups)[0]

    assert agent.content.count("## Combined expertise") == 1
    assert [line for line in agent.content.splitlines() if line.startswith("### From")] == [
        "### From a:",
        "### From b:",
        "### From c:",
    ]
    assert agent.source == "a + b + c"


def test_earlier_description_kept_when_later_is_blank() -> None:
    merged = ComponentMerger().merge_agents(
        [[Agent("x", "First", source="a")], [Agent("x", "", source="b")]]
    )
    assert merged[0].description == "First"


def test_unique_agents_are_returned_unchanged_in_first_seen_order() -> None:
    x, y, y2, z = Agent("x"), Agent("y", source="a"), Agent("y", source="b"), Agent("z")
    merged = ComponentMerger().merge_agents([[x, y], None, [y2, z]])

    assert [a.name for a in merged] == ["x", "y", "z"]
    assert merged[0] is x
    assert merged[2] is z


def test_commands_are_overridden_by_the_last_bundle() -> None:
    test_a = Command("test", "Run tests", content="npm test", source="a")
    lint = Command("lint", source="a")
    test_b = Command("Test", "Run vitest", ("Bash",), "[file]", "npx vitest", "b")

    merged = ComponentMerger().merge_commands([[test_a, lint], [test_b]])

    assert merged == [test_b, lint]
    assert merged[0] is test_b


def test_hooks_are_overridden_by_the_last_bundle() -> None:
    old = Hook("format.sh", HookType.SCRIPT, "prettier", "a")
    new = Hook("format.sh", HookType.SCRIPT, "biome format", "b")
    merged = ComponentMerger().merge_hooks([[old], [], [new]])
    assert merged == [new]


def test_settings_permissions_are_deduplicated() -> None:
    merged = ComponentMerger().merge_settings(
        [{"allow": ["Read", "Read", "Write"]}, {"allow": ["Write", "Exec"]}]
    )
    assert merged.permissions.allow == ["Read", "Write", "Exec"]


def test_settings_merge_each_part() -> None:
    first = {
        "permissions": {"allow": ["Read"], "deny": ["Bash(rm:*)"]},
        "env": {"NODE_ENV": "development", "PORT": "3000"},
        "hooks": {
            "PreToolUse": [
                {"matcher": "Bash", "hooks": [{"type": "command", "command": "echo a"}]},
            ]
        },
        "statusLine": {"type": "command", "command": "status-a"},
        "codeRules": {"eslint": {"extends": ["next"]}, "strict": False},
    }
    second = {
        "permissions": {"allow": ["Read", "Write"], "deny": ["Bash(rm:*)"], "ask": ["Bash(git push:*)"]},
        "env": {"NODE_ENV": "production"},
        "hooks": {
            "PreToolUse": [
                {"hooks": [{"command": "echo b", "timeout": 30}]},
                {"matcher": "broken"},
            ],
            "Stop": [{"hooks": [{"command": "notify"}]}],
        },
        "statusLine": {"type": "command", "command": "status-b"},
        "codeRules": {"eslint": {"extends": ["prettier"]}, "strict": True},
    }

    merged = ComponentMerger().merge_settings([first, None, second]).to_dict()

    assert merged["permissions"] == {
        "allow": ["Read", "Write"],
        "deny": ["Bash(rm:*)"],
        "ask": ["Bash(git push:*)"],
    }
    assert merged["env"] == {"NODE_ENV": "production", "PORT": "3000"}
    assert merged["hooks"] == {
        "PreToolUse": [
            {"matcher": "Bash", "hooks": [{"type": "command", "command": "echo a"}]},
            {"hooks": [{"type": "command", "command": "echo b", "timeout": 30}]},
        ],
        "Stop": [{"hooks": [{"type": "command", "command": "notify"}]}],
    }
    assert merged["statusLine"] == {"type": "command", "command": "status-b"}
    assert merged["codeRules"] == {"eslint": {"extends": ["next", "prettier"]}, "strict": True}


def test_status_line_survives_bundles_without_one() -> None:
    merged = ComponentMerger().merge_settings([{"statusLine": "status-a"}, {"env": {"A": "1"}}])
    assert merged.status_line is not None
    assert merged.status_line.command == "status-a"


def test_unknown_hook_events_pass_through_with_warning() -> None:
    merger = ComponentMerger()
    merged = merger.merge_settings(
        [{"hooks": {"OnDeploy": [{"hooks": [{"command": "a"}]}]}}, {"hooks": {"OnDeploy": ["raw"]}}]
    )

    assert merged.to_dict()["hooks"] == {"OnDeploy": [{"hooks": [{"command": "a"}]}, "raw"]}
    assert merger.diagnostics.codes == [HOOK_EVENT_UNRECOGNIZED, HOOK_EVENT_UNRECOGNIZED]


def test_empty_settings_list_gives_empty_permissions() -> None:
    assert ComponentMerger().merge_settings([]).to_dict() == {"permissions": {"allow": [], "deny": []}}


def test_invalid_settings_entry_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        ComponentMerger().merge_settings([["not", "settings"]])  # type: ignore[list-item]
