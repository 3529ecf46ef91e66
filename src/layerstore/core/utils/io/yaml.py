"""YAML file reading."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .core import PathLike, read_text


def read_yaml(path: PathLike, default: Any = None, raise_on_error: bool = False) -> Any:
    """Parse the YAML document at ``path``.

    A missing file, unreadable file or malformed document yields ``default``
    unless ``raise_on_error`` is set. An empty document also yields
    ``default``.

    Examples:
        >>> config = read_yaml(Path("layers.yaml"), default={})
    """
    path = Path(path)
    try:
        data = yaml.safe_load(read_text(path))
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default
    return default if data is None else data


__all__ = ["read_yaml"]
