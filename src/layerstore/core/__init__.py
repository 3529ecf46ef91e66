"""layerstore core library package.

Public entry points are re-exported here for convenience:

    from layerstore.core import LayeredStore, LayerRegistry, MemoryStorage
"""
from __future__ import annotations

from . import exceptions  # noqa: F401
from .codec import decode, encode
from .exceptions import (
    ConfigurationError,
    ImmutableStoreError,
    LayerResolutionError,
    LayerStoreError,
    SerializationError,
    StorageError,
)
from .registry import LayerRegistry, open_storage
from .storage import FileStorage, LayeredStore, MemoryStorage, Storage

__all__ = [
    "LayeredStore",
    "LayerRegistry",
    "open_storage",
    "Storage",
    "MemoryStorage",
    "FileStorage",
    "encode",
    "decode",
    "LayerStoreError",
    "ConfigurationError",
    "LayerResolutionError",
    "ImmutableStoreError",
    "SerializationError",
    "StorageError",
]
