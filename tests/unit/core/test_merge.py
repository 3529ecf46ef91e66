from __future__ import annotations

from layerstore.core.utils.merge import deep_merge, fill_missing


def test_fill_missing_keeps_existing_keys() -> None:
    acc = {"site_name": "Override"}
    result = fill_missing(acc, {"site_name": "Default", "theme": "basic"})

    assert result is acc
    assert acc == {"site_name": "Override", "theme": "basic"}


def test_fill_missing_is_shallow_and_copies_values() -> None:
    lower = {"nested": {"x": 1}, "items": [1]}
    acc = fill_missing({"nested": {"y": 2}}, lower)

    assert acc["nested"] == {"y": 2}
    acc["items"].append(2)
    assert lower["items"] == [1]


def test_deep_merge_override_wins_recursively() -> None:
    base = {"a": 1, "b": {"c": 2, "d": 3}}
    result = deep_merge(base, {"b": {"d": 4}, "e": 5})

    assert result == {"a": 1, "b": {"c": 2, "d": 4}, "e": 5}
    assert base == {"a": 1, "b": {"c": 2, "d": 3}}


def test_deep_merge_replaces_non_mapping_values() -> None:
    assert deep_merge({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}
    assert deep_merge({"a": {"b": 1}}, {"a": None}) == {"a": None}
