"""
layerstore convert command.

SUMMARY: Convert a config file between YAML and JSON

Reads INPUT (``-`` for stdin), decodes it with the source format (taken from
--from or the file extension) and prints it in the target format.
"""

from __future__ import annotations

import argparse
import sys

from layerstore.cli import OutputFormatter, add_format_arg, guess_format, read_input
from layerstore.core.codec import decode, encode
from layerstore.core.exceptions import LayerStoreError
from layerstore.core.utils.io import write_text

SUMMARY = "Convert a config file between YAML and JSON"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("input", help="Config file to convert ('-' for stdin)")
    add_format_arg(parser, flag="--from", default=None)
    add_format_arg(parser, flag="--to", default="json")
    parser.add_argument("--output", "-o", help="Write the result to this file instead of stdout")


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter()

    try:
        data = decode(read_input(args.input), guess_format(args.input, getattr(args, "from")))
        converted = encode(data, args.to)
        if args.output:
            write_text(args.output, converted)
        else:
            sys.stdout.write(converted)
    except (LayerStoreError, OSError) as e:
        formatter.error(e, error_code="convert_error")
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
