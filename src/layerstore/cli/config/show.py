"""
layerstore config show command.

SUMMARY: Show a merged config object

Reads NAME through the configured storage. For layered storage the result is
the per-key overlay of every layer holding NAME.
"""

from __future__ import annotations

import argparse
import sys

from layerstore.cli import OutputFormatter, add_format_arg, add_standard_flags, open_store
from layerstore.core.codec import encode
from layerstore.core.exceptions import LayerStoreError

SUMMARY = "Show a merged config object"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("name", help="Config object name (e.g., 'system.core')")
    add_format_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        store = open_store(args)
        data = store.read(args.name)
        if data is None:
            formatter.error(LookupError(f"Config object not found: {args.name}"), error_code="not_found")
            return 1

        if formatter.json_mode:
            formatter.json_output({args.name: data})
        else:
            formatter.text(encode(data, args.format).rstrip())
        return 0

    except LayerStoreError as e:
        formatter.error(e, error_code="config_show_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
