"""Config payload codec.

Converts between the in-memory mapping form of a config object and its
serialized text form. Two formats are supported:

- ``yaml`` (default): PyYAML safe dump/load, block style, sorted keys
- ``json``: indented, sorted keys

Both directions insist on a top-level mapping; anything else is a
``SerializationError``.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping

import yaml

from .exceptions import SerializationError

FORMATS = ("yaml", "json")

EXTENSIONS = {
    "yaml": ".yml",
    "json": ".json",
}


def _str_representer(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    """Represent multiline strings with literal block style."""
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


class _BlockDumper(yaml.SafeDumper):
    pass


_BlockDumper.add_representer(str, _str_representer)


def _check_format(fmt: str) -> str:
    if fmt not in FORMATS:
        raise SerializationError(
            f"Unknown config format '{fmt}'. Expected one of: {', '.join(FORMATS)}",
            context={"format": fmt},
        )
    return fmt


def extension_for(fmt: str) -> str:
    """Return the file extension used for ``fmt`` (e.g. ``.yml``)."""
    return EXTENSIONS[_check_format(fmt)]


def encode(data: Mapping[str, Any], fmt: str = "yaml") -> str:
    """Serialize a config mapping to text.

    Raises:
        SerializationError: If ``data`` is not a mapping or contains values
            the format cannot represent.
    """
    _check_format(fmt)
    if not isinstance(data, Mapping):
        raise SerializationError(
            f"Config data must be a mapping, got {type(data).__name__}",
            context={"format": fmt},
        )
    try:
        if fmt == "json":
            return json.dumps(dict(data), indent=2, sort_keys=True, ensure_ascii=False) + "\n"
        return yaml.dump(
            dict(data),
            Dumper=_BlockDumper,
            default_flow_style=False,
            sort_keys=True,
            allow_unicode=True,
        )
    except (TypeError, ValueError, yaml.YAMLError) as exc:
        raise SerializationError(
            f"Cannot encode config data as {fmt}: {exc}",
            context={"format": fmt},
        ) from exc


def decode(raw: str, fmt: str = "yaml") -> Dict[str, Any]:
    """Parse serialized text into a config mapping.

    Empty input decodes to an empty mapping.

    Raises:
        SerializationError: If ``raw`` is malformed or its top level is not
            a mapping.
    """
    _check_format(fmt)
    if not isinstance(raw, str):
        raise SerializationError(
            f"Serialized config must be text, got {type(raw).__name__}",
            context={"format": fmt},
        )
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw) if fmt == "json" else yaml.safe_load(raw)
    except (ValueError, yaml.YAMLError) as exc:
        raise SerializationError(
            f"Cannot decode {fmt} config data: {exc}",
            context={"format": fmt},
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SerializationError(
            f"Decoded config must be a mapping, got {type(data).__name__}",
            context={"format": fmt},
        )
    return data


__all__ = ["FORMATS", "encode", "decode", "extension_for"]
