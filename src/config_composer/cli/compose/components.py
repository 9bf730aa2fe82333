"""
Config composer: compose components command.

SUMMARY: Merge agents, commands and hooks across bundles
"""

from __future__ import annotations

import argparse
import sys

from config_composer.cli import OutputFormatter, add_bundle_dirs_arg, add_standard_flags
from config_composer.cli.compose._context import build_compose_context
from config_composer.core.components import ComponentMerger, render_agent, render_command
from config_composer.core.exceptions import ComposerError

SUMMARY = "Merge agents, commands and hooks across bundles"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_bundle_dirs_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        ctx = build_compose_context(args)
        merger = ComponentMerger(diagnostics=ctx.diagnostics)
        agents = merger.merge_agents([b.agents for b in ctx.bundles])
        commands = merger.merge_commands([b.commands for b in ctx.bundles])
        hooks = merger.merge_hooks([b.hooks for b in ctx.bundles])

        if args.json:
            formatter.json_output({
                "agents": [{**a.to_dict(), "file": render_agent(a)} for a in agents],
                "commands": [{**c.to_dict(), "file": render_command(c)} for c in commands],
                "hooks": [h.to_dict() for h in hooks],
                "warnings": ctx.diagnostics.warnings,
            })
        else:
            formatter.text(f"Agents ({len(agents)}):")
            for agent in agents:
                formatter.text_kv(agent.name, agent.source)
            formatter.text(f"Commands ({len(commands)}):")
            for command in commands:
                formatter.text_kv(command.name, command.source)
            formatter.text(f"Hooks ({len(hooks)}):")
            for hook in hooks:
                formatter.text_kv(hook.name, f"{hook.type.value}, {hook.source}")
        formatter.warnings(ctx.diagnostics.warnings)
        return 0

    except ComposerError as e:
        formatter.error(e, error_code="compose_components_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
