"""
Config Composer CLI package.

Provides the command-line interface with auto-discovery of commands
from subfolders (compose/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
"""
from ._args import (
    add_bundle_dirs_arg,
    add_config_flag,
    add_json_flag,
    add_log_file_flag,
    add_output_flag,
    add_standard_flags,
    add_verbose_flag,
)
from ._output import OutputFormatter

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_verbose_flag",
    "add_log_file_flag",
    "add_config_flag",
    "add_output_flag",
    "add_bundle_dirs_arg",
    "add_standard_flags",
]
