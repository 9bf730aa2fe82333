"""Common CLI argument registration utilities.

Compose commands share the same flags; registering them here keeps the
spelling and help text identical across commands.
"""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )


def add_log_file_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-file",
        type=str,
        help="Write log records to this file instead of stderr",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config flag for a composer configuration overlay."""
    parser.add_argument(
        "--config",
        type=str,
        help="YAML overlay for the composer configuration "
        "(defaults to $CONFIG_COMPOSER_CONFIG)",
    )


def add_output_flag(parser: argparse.ArgumentParser, help_text: str = "Write the result to this file") -> None:
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help=help_text,
    )


def add_bundle_dirs_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional list of bundle directories (merge order)."""
    parser.add_argument(
        "bundles",
        nargs="+",
        metavar="BUNDLE_DIR",
        help="Configuration bundle directories, lowest precedence first",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags every compose command accepts."""
    add_json_flag(parser)
    add_verbose_flag(parser)
    add_log_file_flag(parser)
    add_config_flag(parser)


__all__ = [
    "add_json_flag",
    "add_verbose_flag",
    "add_log_file_flag",
    "add_config_flag",
    "add_output_flag",
    "add_bundle_dirs_arg",
    "add_standard_flags",
]
