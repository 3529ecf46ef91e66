from __future__ import annotations

from pathlib import Path

import pytest

from layerstore.core.exceptions import ImmutableStoreError, StorageError
from layerstore.core.storage import MemoryStorage, Storage


def test_memory_storage_conforms_to_protocol() -> None:
    assert isinstance(MemoryStorage(), Storage)


def test_write_read_round_trip_copies_data() -> None:
    storage = MemoryStorage()
    payload = {"site_name": "Example", "tags": ["a"]}

    assert storage.write("system.core", payload) is True
    payload["tags"].append("b")
    data = storage.read("system.core")
    data["site_name"] = "changed"

    assert storage.read("system.core") == {"site_name": "Example", "tags": ["a"]}


def test_missing_object_reads_as_none() -> None:
    storage = MemoryStorage()
    assert storage.read("missing") is None
    assert storage.exists("missing") is False
    assert storage.get_modified_time("missing") is None


def test_initialize_marks_initialized() -> None:
    storage = MemoryStorage()
    assert storage.is_initialized() is False
    storage.initialize_storage()
    assert storage.is_initialized() is True


def test_list_all_filters_by_prefix_and_sorts() -> None:
    storage = MemoryStorage({"node.2": {}, "node.1": {}, "system.core": {}})
    assert storage.list_all() == ["node.1", "node.2", "system.core"]
    assert storage.list_all("node.") == ["node.1", "node.2"]


def test_rename_moves_object() -> None:
    storage = MemoryStorage({"old": {"k": 1}})

    assert storage.rename("old", "new") is True
    assert storage.read("new") == {"k": 1}
    assert storage.exists("old") is False
    assert storage.rename("old", "other") is False


def test_delete_and_delete_all() -> None:
    storage = MemoryStorage({"node.1": {}, "node.2": {}, "system.core": {}})

    assert storage.delete("node.1") is True
    assert storage.delete("node.1") is False
    assert storage.delete_all("node.") is True
    assert storage.list_all() == ["system.core"]


def test_modified_time_recorded_on_write() -> None:
    storage = MemoryStorage()
    storage.write("a", {})
    assert isinstance(storage.get_modified_time("a"), float)


def test_read_multiple_returns_existing_names_only() -> None:
    storage = MemoryStorage({"a": {"k": 1}})
    assert storage.read_multiple(["a", "b"]) == {"a": {"k": 1}}


@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.write("a", {}),
        lambda s: s.write_multiple({"a": {}}),
        lambda s: s.delete("a"),
        lambda s: s.rename("a", "b"),
        lambda s: s.delete_all(),
        lambda s: s.import_archive("/nonexistent"),
    ],
)
def test_immutable_memory_storage_refuses_writes(call) -> None:
    storage = MemoryStorage({"a": {"k": 1}}, immutable=True)
    with pytest.raises(ImmutableStoreError):
        call(storage)
    assert storage.read("a") == {"k": 1}


def test_import_archive_loads_config_directory(tmp_path: Path) -> None:
    (tmp_path / "system.core.yml").write_text("site_name: Imported\n", encoding="utf-8")
    (tmp_path / "views.front.json").write_text('{"path": "/front"}', encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    storage = MemoryStorage()

    assert storage.import_archive(str(tmp_path)) is True

    assert storage.list_all() == ["system.core", "views.front"]
    assert storage.read("views.front") == {"path": "/front"}


def test_import_archive_requires_directory(tmp_path: Path) -> None:
    with pytest.raises(StorageError):
        MemoryStorage().import_archive(str(tmp_path / "missing"))
