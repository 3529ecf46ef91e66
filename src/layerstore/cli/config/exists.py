"""
layerstore config exists command.

SUMMARY: Check whether a config object exists

Exit code 0 when any layer holds NAME, 1 otherwise.
"""

from __future__ import annotations

import argparse
import sys

from layerstore.cli import OutputFormatter, add_standard_flags, open_store
from layerstore.core.exceptions import LayerStoreError

SUMMARY = "Check whether a config object exists"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("name", help="Config object name")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        found = open_store(args).exists(args.name)
    except LayerStoreError as e:
        formatter.error(e, error_code="config_exists_error")
        return 1

    formatter.success({"name": args.name, "exists": found}, "true" if found else "false")
    return 0 if found else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
