"""I/O utilities for layerstore.

- core: atomic writes, locked reads, directory creation
- yaml: YAML file reading
"""
from __future__ import annotations

from .core import PathLike, atomic_write, ensure_directory, read_text, write_text
from .yaml import read_yaml

__all__ = [
    "PathLike",
    "ensure_directory",
    "atomic_write",
    "read_text",
    "write_text",
    "read_yaml",
]
