"""Filesystem config storage.

Each config object lives in its own file, ``<directory>/<name><ext>``, where
the extension follows the storage format (``.yml`` or ``.json``). Writes go
through the atomic writer so a crashed write never leaves a truncated file.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..codec import decode, encode, extension_for
from ..exceptions import ImmutableStoreError, StorageError
from ..utils.io import PathLike, ensure_directory, read_text, write_text
from .protocols import ConfigData

logger = logging.getLogger(__name__)

# Extensions recognised when importing a directory of config files.
_IMPORT_FORMATS = {
    ".yml": "yaml",
    ".yaml": "yaml",
    ".json": "json",
}


def load_config_directory(directory: PathLike) -> Dict[str, ConfigData]:
    """Decode every config file directly inside ``directory``.

    Files are read in sorted order; hidden files are skipped.

    Raises:
        StorageError: If ``directory`` is not a directory or a file cannot be read.
        SerializationError: If a file does not contain a config mapping.
    """
    d = Path(directory)
    if not d.is_dir():
        raise StorageError(f"Config directory not found: {d}", context={"directory": str(d)})

    objects: Dict[str, ConfigData] = {}
    for path in sorted(d.iterdir()):
        if path.name.startswith(".") or not path.is_file():
            continue
        fmt = _IMPORT_FORMATS.get(path.suffix)
        if fmt is None:
            continue
        try:
            raw = read_text(path)
        except OSError as exc:
            raise StorageError(f"Cannot read {path}: {exc}", context={"path": str(path)}) from exc
        objects[path.name[: -len(path.suffix)]] = decode(raw, fmt)
    return objects


class FileStorage:
    """One-file-per-object storage rooted at ``directory``."""

    def __init__(self, directory: PathLike, *, immutable: bool = False, fmt: str = "yaml") -> None:
        self.directory = Path(directory)
        self.fmt = fmt
        self.extension = extension_for(fmt)
        self._immutable = immutable

    def __repr__(self) -> str:
        mode = "immutable" if self._immutable else "mutable"
        return f"FileStorage({str(self.directory)!r}, {self.fmt}, {mode})"

    def _guard(self, operation: str) -> None:
        if self._immutable:
            raise ImmutableStoreError(
                f"Cannot {operation}: {self.directory} is immutable",
                operation=operation,
                context={"directory": str(self.directory)},
            )

    def path_for(self, name: str) -> Path:
        """Return the file path backing config object ``name``."""
        if not name or name.startswith(".") or "/" in name or os.sep in name:
            raise StorageError(f"Invalid config name: {name!r}", context={"name": name})
        return self.directory / f"{name}{self.extension}"

    def is_immutable(self) -> bool:
        return self._immutable

    def initialize_storage(self) -> None:
        if self._immutable:
            logger.debug("Skipping initialization of immutable storage %s", self.directory)
            return
        try:
            ensure_directory(self.directory)
        except OSError as exc:
            raise StorageError(
                f"Cannot create config directory {self.directory}: {exc}",
                context={"directory": str(self.directory)},
            ) from exc

    def is_initialized(self) -> bool:
        return self.directory.is_dir()

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def read(self, name: str) -> Optional[ConfigData]:
        path = self.path_for(name)
        if not path.is_file():
            return None
        try:
            raw = read_text(path)
        except OSError as exc:
            raise StorageError(f"Cannot read {path}: {exc}", context={"path": str(path)}) from exc
        return decode(raw, self.fmt)

    def read_multiple(self, names: Iterable[str]) -> Dict[str, ConfigData]:
        out: Dict[str, ConfigData] = {}
        for name in names:
            data = self.read(name)
            if data is not None:
                out[name] = data
        return out

    def write(self, name: str, data: Mapping[str, Any]) -> bool:
        self._guard("write")
        path = self.path_for(name)
        content = encode(data, self.fmt)
        try:
            write_text(path, content)
        except OSError as exc:
            raise StorageError(f"Cannot write {path}: {exc}", context={"path": str(path)}) from exc
        return True

    def write_multiple(self, data: Mapping[str, Mapping[str, Any]]) -> bool:
        self._guard("write_multiple")
        for name, value in data.items():
            self.write(name, value)
        return True

    def delete(self, name: str) -> bool:
        self._guard("delete")
        path = self.path_for(name)
        if not path.is_file():
            return False
        try:
            path.unlink()
        except OSError as exc:
            raise StorageError(f"Cannot delete {path}: {exc}", context={"path": str(path)}) from exc
        return True

    def rename(self, name: str, new_name: str) -> bool:
        self._guard("rename")
        source = self.path_for(name)
        if not source.is_file():
            return False
        target = self.path_for(new_name)
        try:
            os.replace(str(source), str(target))
        except OSError as exc:
            raise StorageError(
                f"Cannot rename {source} to {target}: {exc}",
                context={"path": str(source), "target": str(target)},
            ) from exc
        return True

    def get_modified_time(self, name: str) -> Optional[float]:
        path = self.path_for(name)
        if not path.is_file():
            return None
        return path.stat().st_mtime

    def list_all(self, prefix: str = "") -> List[str]:
        if not self.directory.is_dir():
            return []
        names: List[str] = []
        for path in self.directory.glob(f"*{self.extension}"):
            if path.name.startswith(".") or not path.is_file():
                continue
            name = path.name[: -len(self.extension)]
            if name.startswith(prefix):
                names.append(name)
        return sorted(names)

    def delete_all(self, prefix: str = "") -> bool:
        self._guard("delete_all")
        for name in self.list_all(prefix):
            self.delete(name)
        return True

    def import_archive(self, uri: str) -> bool:
        """Copy every config file found in the directory ``uri`` into this storage."""
        self._guard("import_archive")
        objects = load_config_directory(uri)
        logger.info("Importing %d config objects from %s into %s", len(objects), uri, self.directory)
        return self.write_multiple(objects)


__all__ = ["FileStorage", "load_config_directory"]
