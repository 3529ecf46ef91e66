from __future__ import annotations

import json

import pytest

from layerstore.core.codec import decode, encode, extension_for
from layerstore.core.exceptions import SerializationError


def test_yaml_encoding_is_sorted_block_style() -> None:
    text = encode({"theme": "basic", "site_name": "Example", "menu": {"main": ["home"]}})
    assert text == "menu:\n  main:\n  - home\nsite_name: Example\ntheme: basic\n"


def test_multiline_strings_use_literal_blocks() -> None:
    text = encode({"footer": "line one\nline two\n"})
    assert "footer: |" in text
    assert decode(text) == {"footer": "line one\nline two\n"}


def test_json_encoding_is_indented_and_sorted() -> None:
    text = encode({"b": 1, "a": "é"}, "json")
    assert text == '{\n  "a": "é",\n  "b": 1\n}\n'
    assert json.loads(text) == {"a": "é", "b": 1}


@pytest.mark.parametrize("raw", ["", "   \n", "~\n"])
def test_empty_documents_decode_to_empty_mapping(raw: str) -> None:
    assert decode(raw) == {}


@pytest.mark.parametrize(
    ("raw", "fmt"),
    [
        ("key: [unterminated", "yaml"),
        ("- a\n- b\n", "yaml"),
        ("plain scalar", "yaml"),
        ("{not json", "json"),
        ("[1, 2]", "json"),
    ],
)
def test_malformed_or_non_mapping_input_is_rejected(raw: str, fmt: str) -> None:
    with pytest.raises(SerializationError):
        decode(raw, fmt)


def test_decode_rejects_non_text() -> None:
    with pytest.raises(SerializationError):
        decode(b"key: value")  # type: ignore[arg-type]


@pytest.mark.parametrize("data", [["a", "b"], "text", None])
def test_encode_rejects_non_mappings(data) -> None:
    with pytest.raises(SerializationError):
        encode(data)


def test_encode_rejects_unrepresentable_values() -> None:
    with pytest.raises(SerializationError):
        encode({"handle": object()})
    with pytest.raises(SerializationError):
        encode({"handle": object()}, "json")


def test_unknown_format_is_a_serialization_error() -> None:
    with pytest.raises(SerializationError) as excinfo:
        encode({}, "toml")
    assert excinfo.value.context == {"format": "toml"}


def test_extension_for_known_formats() -> None:
    assert extension_for("yaml") == ".yml"
    assert extension_for("json") == ".json"
