"""
layerstore config import-archive command.

SUMMARY: Import a directory of config files into the mutable layer
"""

from __future__ import annotations

import argparse
import sys

from layerstore.cli import OutputFormatter, add_standard_flags, open_store
from layerstore.core.exceptions import LayerStoreError

SUMMARY = "Import a directory of config files into the mutable layer"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("directory", help="Directory holding *.yml / *.json config files")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        imported = open_store(args).import_archive(args.directory)
    except LayerStoreError as e:
        formatter.error(e, error_code="config_import_error")
        return 1

    formatter.success(
        {"directory": args.directory, "imported": imported},
        f"Imported {args.directory}" if imported else f"Import of {args.directory} failed",
    )
    return 0 if imported else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
