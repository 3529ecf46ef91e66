"""
layerstore config list command.

SUMMARY: List config object names

Prints the union of names across every layer, optionally filtered by prefix.
"""

from __future__ import annotations

import argparse
import sys

from layerstore.cli import OutputFormatter, add_standard_flags, open_store
from layerstore.core.exceptions import LayerStoreError

SUMMARY = "List config object names"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("prefix", nargs="?", default="", help="Only list names starting with PREFIX")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        names = open_store(args).list_all(args.prefix)
    except LayerStoreError as e:
        formatter.error(e, error_code="config_list_error")
        return 1

    if formatter.json_mode:
        formatter.json_output({"prefix": args.prefix, "names": names})
    else:
        for name in names:
            formatter.text(name)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
