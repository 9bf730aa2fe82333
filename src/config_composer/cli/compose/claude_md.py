"""
Config composer: compose claude-md command.

SUMMARY: Merge the CLAUDE.md documents of several bundles into one
"""

from __future__ import annotations

import argparse
import sys

from config_composer.cli import OutputFormatter, add_bundle_dirs_arg, add_output_flag, add_standard_flags
from config_composer.cli.compose._context import build_compose_context, write_output
from config_composer.core.composition import ConfigMerger
from config_composer.core.exceptions import ComposerError

SUMMARY = "Merge the CLAUDE.md documents of several bundles into one"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_bundle_dirs_arg(parser)
    add_output_flag(parser, "Write the merged CLAUDE.md here instead of stdout")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        ctx = build_compose_context(args)
        result = ConfigMerger(config=ctx.config).merge([b.to_merge_input() for b in ctx.bundles])
        ctx.diagnostics.extend(result.diagnostics)
        warnings = ctx.diagnostics.warnings

        written = write_output(args.output, result.content) if args.output else None
        if args.json:
            formatter.json_output({
                "sources": result.sources,
                "sections": result.bucket_count,
                "output": str(written) if written else None,
                "content": None if written else result.content,
                "warnings": warnings,
            })
        elif written:
            formatter.text(f"Merged {len(result.sources)} configuration(s) into {written}")
        else:
            formatter.text(result.content.rstrip("\n"))
        formatter.warnings(warnings)
        return 0

    except ComposerError as e:
        formatter.error(e, error_code="compose_claude_md_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
