"""
layerstore CLI package.

Provides the command-line interface with auto-discovery of commands
from subfolders (config/) and root commands (commands/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import (
    add_json_flag,
    add_storage_flags,
    add_format_arg,
    add_standard_flags,
)
from ._utils import (
    open_store,
    guess_format,
    read_input,
)

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_storage_flags",
    "add_format_arg",
    "add_standard_flags",
    # Utilities
    "open_store",
    "guess_format",
    "read_input",
]
