"""
layerstore config set command.

SUMMARY: Write a config object from a file

Decodes FILE (``-`` for stdin) and writes it to the mutable layer. Fails when
the storage has no mutable layer.
"""

from __future__ import annotations

import argparse
import sys

from layerstore.cli import (
    OutputFormatter,
    add_format_arg,
    add_standard_flags,
    guess_format,
    open_store,
    read_input,
)
from layerstore.core.codec import decode
from layerstore.core.exceptions import LayerStoreError

SUMMARY = "Write a config object from a file"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("name", help="Config object name")
    parser.add_argument("file", help="YAML/JSON file holding the object ('-' for stdin)")
    add_format_arg(parser, default=None)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        data = decode(read_input(args.file), guess_format(args.file, args.format))
        store = open_store(args)
        written = store.write(args.name, data)
    except LayerStoreError as e:
        formatter.error(e, error_code="config_set_error")
        return 1

    if not written:
        formatter.error(RuntimeError(f"Storage refused to write {args.name}"), error_code="config_set_error")
        return 1
    formatter.success({"name": args.name, "keys": sorted(data)}, f"Wrote {args.name}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
