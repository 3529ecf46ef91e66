"""
Entry point for the ``layerstore`` command.

Commands are discovered from the package layout rather than listed by hand:

- ``cli/commands/<name>.py``  -> ``layerstore <name>``
- ``cli/<domain>/<name>.py``  -> ``layerstore <domain> <name>``

A command module exposes ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``. Underscores in module names become dashes on the
command line (``import_archive`` -> ``import-archive``); the underscore
spelling stays available as an alias.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

CLI_DIR = Path(__file__).parent
ROOT_COMMANDS = "commands"


def _is_command_file(path: Path) -> bool:
    return path.suffix == ".py" and not path.name.startswith("_")


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """Map domain name -> directory for every subpackage holding commands."""
    domains: dict[str, Path] = {}
    for item in sorted(CLI_DIR.iterdir()):
        if not item.is_dir() or item.name.startswith("_") or item.name == ROOT_COMMANDS:
            continue
        if any(_is_command_file(f) for f in item.iterdir()):
            domains[item.name] = item
    return domains


def _load_command_modules(package: str, directory: Path) -> dict[str, dict[str, Any]]:
    commands: dict[str, dict[str, Any]] = {}
    if not directory.is_dir():
        return commands

    for item in sorted(filter(_is_command_file, directory.iterdir())):
        qualified = f"{package}.{item.stem}"
        try:
            module = importlib.import_module(qualified)
        except ImportError as e:
            print(f"Warning: skipping command {qualified}: {e}", file=sys.stderr)
            continue
        commands[item.stem] = {
            "summary": getattr(module, "SUMMARY", item.stem),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }
    return commands


@lru_cache(maxsize=1)
def discover_root_commands() -> dict[str, dict[str, Any]]:
    """Commands invoked without a domain prefix (e.g. ``layerstore convert``)."""
    return _load_command_modules(f"layerstore.cli.{ROOT_COMMANDS}", CLI_DIR / ROOT_COMMANDS)


@lru_cache(maxsize=32)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """Commands of one domain, keyed by module name."""
    return _load_command_modules(f"layerstore.cli.{domain}", CLI_DIR / domain)


def _add_command(subparsers: Any, name: str, info: dict[str, Any]) -> None:
    dashed = name.replace("_", "-")
    parser = subparsers.add_parser(
        dashed,
        aliases=[name] if dashed != name else [],
        help=info["summary"],
    )
    if info["register_args"]:
        info["register_args"](parser)
    if info["main"]:
        parser.set_defaults(_func=info["main"])


def build_parser() -> argparse.ArgumentParser:
    """Top-level parser with every discovered domain and command registered."""
    from layerstore import __version__

    parser = argparse.ArgumentParser(
        prog="layerstore",
        description="layerstore - layered configuration storage",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-file", metavar="PATH", help="Write layerstore log records to PATH")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (logs go to stderr unless --log-file is given)",
    )

    subparsers = parser.add_subparsers(dest="domain", metavar="<command>")
    for name, info in sorted(discover_root_commands().items()):
        _add_command(subparsers, name, info)

    for domain in discover_domains():
        commands = discover_commands(domain)
        if not commands:
            continue
        domain_parser = subparsers.add_parser(domain, help=f"{domain.title()} object commands")
        domain_parser.set_defaults(_domain_parser=domain_parser)
        command_parsers = domain_parser.add_subparsers(dest="command", metavar="<command>")
        for name, info in sorted(commands.items()):
            _add_command(command_parsers, name, info)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.log_file or args.log_level:
        from layerstore.core.stdlib_logging import configure_stdlib_logging

        configure_stdlib_logging(
            log_path=Path(args.log_file) if args.log_file else None,
            level=args.log_level or "INFO",
        )

    if getattr(args, "json", False):
        from layerstore.core.stdlib_logging import suppress_lastresort_in_json_mode

        suppress_lastresort_in_json_mode()

    func = getattr(args, "_func", None)
    if func is None:
        # Bare ``layerstore`` or ``layerstore <domain>``.
        getattr(args, "_domain_parser", parser).print_help()
        return 0
    return int(func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
