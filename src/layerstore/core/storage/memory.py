"""In-memory config storage.

Useful as a scratch layer, in tests, and as the target of ``memory:`` storage
URLs. Values are deep-copied on the way in and on the way out so callers can
never mutate stored state by accident.
"""
from __future__ import annotations

import copy
import logging
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..exceptions import ImmutableStoreError
from .file import load_config_directory
from .protocols import ConfigData

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Dict-backed storage layer."""

    def __init__(
        self,
        data: Optional[Mapping[str, Mapping[str, Any]]] = None,
        *,
        immutable: bool = False,
    ) -> None:
        self._immutable = immutable
        self._initialized = False
        self._data: Dict[str, ConfigData] = {}
        self._mtimes: Dict[str, float] = {}
        now = time.time()
        for name, value in (data or {}).items():
            self._data[name] = copy.deepcopy(dict(value))
            self._mtimes[name] = now

    def __repr__(self) -> str:
        mode = "immutable" if self._immutable else "mutable"
        return f"MemoryStorage({len(self._data)} objects, {mode})"

    def _guard(self, operation: str) -> None:
        if self._immutable:
            raise ImmutableStoreError(
                f"Cannot {operation}: memory storage is immutable",
                operation=operation,
            )

    def is_immutable(self) -> bool:
        return self._immutable

    def initialize_storage(self) -> None:
        self._initialized = True

    def is_initialized(self) -> bool:
        return self._initialized

    def exists(self, name: str) -> bool:
        return name in self._data

    def read(self, name: str) -> Optional[ConfigData]:
        if name not in self._data:
            return None
        return copy.deepcopy(self._data[name])

    def read_multiple(self, names: Iterable[str]) -> Dict[str, ConfigData]:
        return {name: copy.deepcopy(self._data[name]) for name in names if name in self._data}

    def write(self, name: str, data: Mapping[str, Any]) -> bool:
        self._guard("write")
        self._data[name] = copy.deepcopy(dict(data))
        self._mtimes[name] = time.time()
        return True

    def write_multiple(self, data: Mapping[str, Mapping[str, Any]]) -> bool:
        self._guard("write_multiple")
        for name, value in data.items():
            self.write(name, value)
        return True

    def delete(self, name: str) -> bool:
        self._guard("delete")
        if name not in self._data:
            return False
        del self._data[name]
        self._mtimes.pop(name, None)
        return True

    def rename(self, name: str, new_name: str) -> bool:
        self._guard("rename")
        if name not in self._data:
            return False
        self._data[new_name] = self._data.pop(name)
        self._mtimes.pop(name, None)
        self._mtimes[new_name] = time.time()
        return True

    def get_modified_time(self, name: str) -> Optional[float]:
        return self._mtimes.get(name)

    def list_all(self, prefix: str = "") -> List[str]:
        return sorted(name for name in self._data if name.startswith(prefix))

    def delete_all(self, prefix: str = "") -> bool:
        self._guard("delete_all")
        for name in self.list_all(prefix):
            self.delete(name)
        return True

    def import_archive(self, uri: str) -> bool:
        """Load every config file found in the directory ``uri``."""
        self._guard("import_archive")
        objects = load_config_directory(uri)
        logger.debug("Importing %d config objects from %s into memory", len(objects), uri)
        return self.write_multiple(objects)


__all__ = ["MemoryStorage"]
