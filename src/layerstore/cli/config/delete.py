"""
layerstore config delete command.

SUMMARY: Delete a config object from the mutable layer

Copies of NAME held by other layers stay visible afterwards.
"""

from __future__ import annotations

import argparse
import sys

from layerstore.cli import OutputFormatter, add_standard_flags, open_store
from layerstore.core.exceptions import LayerStoreError

SUMMARY = "Delete a config object from the mutable layer"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("name", help="Config object name")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        deleted = open_store(args).delete(args.name)
    except LayerStoreError as e:
        formatter.error(e, error_code="config_delete_error")
        return 1

    message = f"Deleted {args.name}" if deleted else f"Nothing deleted for {args.name}"
    formatter.success({"name": args.name, "deleted": deleted}, message)
    return 0 if deleted else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
