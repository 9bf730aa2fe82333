"""
Config composer: compose settings command.

SUMMARY: Merge the .claude/settings.json files of several bundles
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from config_composer.cli import OutputFormatter, add_bundle_dirs_arg, add_output_flag, add_standard_flags
from config_composer.cli.compose._context import build_compose_context
from config_composer.core.components import ComponentMerger
from config_composer.core.exceptions import ComposerError
from config_composer.core.utils.io import write_json_atomic

SUMMARY = "Merge the .claude/settings.json files of several bundles"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_bundle_dirs_arg(parser)
    add_output_flag(parser, "Write the merged settings.json here instead of stdout")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        ctx = build_compose_context(args)
        merger = ComponentMerger(diagnostics=ctx.diagnostics)
        settings = merger.merge_settings([b.settings for b in ctx.bundles]).to_dict()

        if args.output:
            target = Path(args.output).expanduser()
            write_json_atomic(target, settings, indent=2)
            formatter.success(
                {"output": str(target), "warnings": ctx.diagnostics.warnings},
                f"Wrote merged settings to {target}",
            )
        else:
            formatter.json_output(settings)
        formatter.warnings(ctx.diagnostics.warnings)
        return 0

    except ComposerError as e:
        formatter.error(e, error_code="compose_settings_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
