"""Config storage backends and the layered resolver.

Every backend conforms structurally to ``Storage``:

    MemoryStorage   in-process dict
    FileStorage     one YAML/JSON file per config object
    LayeredStore    ordered stack of other storages
"""
from __future__ import annotations

from .file import FileStorage, load_config_directory
from .layered import LayeredStore, parse_storage_spec
from .memory import MemoryStorage
from .protocols import ConfigData, LayerLookup, Storage

__all__ = [
    "ConfigData",
    "Storage",
    "LayerLookup",
    "MemoryStorage",
    "FileStorage",
    "load_config_directory",
    "LayeredStore",
    "parse_storage_spec",
]
