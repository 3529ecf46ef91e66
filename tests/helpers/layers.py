"""Storage doubles for resolver tests."""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Tuple

from layerstore.core.exceptions import StorageError
from layerstore.core.storage import MemoryStorage


class RecordingStorage(MemoryStorage):
    """MemoryStorage that records every capability call.

    Args:
        fail_on: operation names that raise ``StorageError`` when called
        rename_result: when set, ``rename`` returns it without renaming
        modified_time: fixed timestamp reported for every existing object
    """

    def __init__(
        self,
        data: Optional[Mapping[str, Mapping[str, Any]]] = None,
        *,
        immutable: bool = False,
        fail_on: Iterable[str] = (),
        rename_result: Optional[bool] = None,
        modified_time: Optional[float] = None,
    ) -> None:
        super().__init__(data, immutable=immutable)
        self.calls: List[Tuple[Any, ...]] = []
        self.fail_on = set(fail_on)
        self.rename_result = rename_result
        self.modified_time = modified_time

    def _record(self, op: str, *args: Any) -> None:
        self.calls.append((op, *args))
        if op in self.fail_on:
            raise StorageError(f"{op} failed")

    def initialize_storage(self) -> None:
        self._record("initialize_storage")
        super().initialize_storage()

    def exists(self, name):
        self._record("exists", name)
        return super().exists(name)

    def read(self, name):
        self._record("read", name)
        return super().read(name)

    def write(self, name, data):
        self._record("write", name)
        return super().write(name, data)

    def write_multiple(self, data):
        self._record("write_multiple", tuple(sorted(data)))
        return super().write_multiple(data)

    def delete(self, name):
        self._record("delete", name)
        return super().delete(name)

    def rename(self, name, new_name):
        self._record("rename", name, new_name)
        if self.rename_result is not None:
            return self.rename_result
        return super().rename(name, new_name)

    def get_modified_time(self, name):
        self._record("get_modified_time", name)
        if self.modified_time is not None and super().exists(name):
            return self.modified_time
        return super().get_modified_time(name)

    def list_all(self, prefix=""):
        self._record("list_all", prefix)
        return super().list_all(prefix)

    def delete_all(self, prefix=""):
        self._record("delete_all", prefix)
        return super().delete_all(prefix)

    def import_archive(self, uri):
        self._record("import_archive", uri)
        return super().import_archive(uri)


def ops(storage: RecordingStorage) -> List[str]:
    """Operation names recorded on ``storage``, in call order."""
    return [call[0] for call in storage.calls]


__all__ = ["RecordingStorage", "ops"]
