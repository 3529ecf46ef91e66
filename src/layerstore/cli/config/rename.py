"""
layerstore config rename command.

SUMMARY: Rename a config object in every mutable layer holding it
"""

from __future__ import annotations

import argparse
import sys

from layerstore.cli import OutputFormatter, add_standard_flags, open_store
from layerstore.core.exceptions import LayerStoreError

SUMMARY = "Rename a config object in every mutable layer holding it"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("name", help="Current config object name")
    parser.add_argument("new_name", help="New config object name")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        renamed = open_store(args).rename(args.name, args.new_name)
    except LayerStoreError as e:
        formatter.error(e, error_code="config_rename_error")
        return 1

    message = f"Renamed {args.name} -> {args.new_name}" if renamed else f"Rename of {args.name} failed"
    formatter.success({"name": args.name, "new_name": args.new_name, "renamed": renamed}, message)
    return 0 if renamed else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
