"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_storage_flags(parser: argparse.ArgumentParser) -> None:
    """Add --config and --storage flags used to open the store."""
    parser.add_argument(
        "--config",
        action="append",
        metavar="PATH",
        help="Layers file (repeatable; merged after $LAYERSTORE_CONFIG)",
    )
    parser.add_argument(
        "--storage",
        metavar="URL",
        help="Storage URL, e.g. layered:/active/defaults (overrides $LAYERSTORE_STORAGE)",
    )


def add_format_arg(parser: argparse.ArgumentParser, *, flag: str = "--format", default: str | None = "yaml") -> None:
    """Add a config format choice (yaml/json)."""
    parser.add_argument(
        flag,
        dest=flag.lstrip("-").replace("-", "_"),
        choices=["yaml", "json"],
        default=default,
        help=f"Config format (default: {default or 'from file extension'})",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags every store command accepts."""
    add_storage_flags(parser)
    add_json_flag(parser)


__all__ = [
    "add_json_flag",
    "add_storage_flags",
    "add_format_arg",
    "add_standard_flags",
]
