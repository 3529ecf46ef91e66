"""Shared CLI utilities."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from layerstore.core.config import load_default_config
from layerstore.core.exceptions import ConfigurationError, StorageError
from layerstore.core.storage import Storage
from layerstore.core.utils.io import read_text

_FORMAT_BY_SUFFIX = {
    ".yml": "yaml",
    ".yaml": "yaml",
    ".json": "json",
}


def open_store(args: argparse.Namespace) -> Storage:
    """Open the storage selected by ``--config``/``--storage`` and the environment.

    Raises:
        ConfigurationError: If an explicit ``--config`` file is missing or no
            storage URL can be determined.
    """
    extra = list(getattr(args, "config", None) or [])
    for path in extra:
        if not Path(path).exists():
            raise ConfigurationError(f"Layers file not found: {path}", context={"path": str(path)})
    config = load_default_config(extra)
    return config.open(getattr(args, "storage", None))


def guess_format(path: str, explicit: Optional[str] = None) -> str:
    """Pick a codec format from ``explicit`` or the file extension (YAML fallback)."""
    if explicit:
        return explicit
    return _FORMAT_BY_SUFFIX.get(Path(path).suffix.lower(), "yaml")


def read_input(path: str) -> str:
    """Read text from ``path``, or stdin when ``path`` is ``-``."""
    if path == "-":
        return sys.stdin.read()
    try:
        return read_text(path)
    except OSError as exc:
        raise StorageError(f"Cannot read {path}: {exc}", context={"path": path}) from exc


__all__ = ["open_store", "guess_format", "read_input"]
