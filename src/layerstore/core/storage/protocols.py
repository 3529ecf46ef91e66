"""Protocols for config storage backends.

A backend is anything that structurally provides the capability set below.
There is no base class to inherit from; ``MemoryStorage``, ``FileStorage``
and ``LayeredStore`` all conform by shape alone.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, runtime_checkable

ConfigData = Dict[str, Any]


@runtime_checkable
class Storage(Protocol):
    """Capability set every config layer must implement."""

    def is_immutable(self) -> bool:
        """True when the backend refuses writes."""
        ...

    def initialize_storage(self) -> None:
        """Prepare the backend for use (create directories, tables, ...)."""
        ...

    def is_initialized(self) -> bool:
        ...

    def exists(self, name: str) -> bool:
        ...

    def read(self, name: str) -> Optional[ConfigData]:
        """Return the config object, or None when it does not exist."""
        ...

    def read_multiple(self, names: Iterable[str]) -> Dict[str, ConfigData]:
        """Return a mapping of name to data for the names that exist."""
        ...

    def write(self, name: str, data: Mapping[str, Any]) -> bool:
        ...

    def write_multiple(self, data: Mapping[str, Mapping[str, Any]]) -> bool:
        ...

    def delete(self, name: str) -> bool:
        """Delete a config object. False when nothing was deleted."""
        ...

    def rename(self, name: str, new_name: str) -> bool:
        ...

    def get_modified_time(self, name: str) -> Optional[float]:
        """Modification time as a POSIX timestamp, or None when unknown."""
        ...

    def list_all(self, prefix: str = "") -> List[str]:
        ...

    def delete_all(self, prefix: str = "") -> bool:
        ...

    def import_archive(self, uri: str) -> bool:
        ...


@runtime_checkable
class LayerLookup(Protocol):
    """Resolves a layer name to a storage instance.

    Implementations raise ``LayerResolutionError`` for unknown names.
    """

    def resolve(self, name: str) -> Storage:
        ...


__all__ = ["ConfigData", "Storage", "LayerLookup"]
