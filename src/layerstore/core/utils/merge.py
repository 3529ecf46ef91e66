"""Canonical merge utilities.

Two merge flavours are used throughout layerstore:

- ``deep_merge``: recursive, override wins. Used when combining layers files.
- ``fill_missing``: shallow, existing keys win. Used by the layered resolver,
  where the accumulator is built from the highest precedence layer down.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Mapping


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Args:
        base: Base dictionary (lower priority)
        override: Override dictionary (higher priority)

    Returns:
        New merged dictionary

    Example:
        >>> base = {"a": 1, "b": {"c": 2}}
        >>> override = {"b": {"d": 3}}
        >>> deep_merge(base, override)
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def fill_missing(accumulator: Dict[str, Any], lower: Mapping[str, Any]) -> Dict[str, Any]:
    """Add top-level keys of ``lower`` that ``accumulator`` does not have yet.

    ``accumulator`` is updated in place and returned. Keys already present are
    never overwritten, nested mappings are not merged, and added values are
    deep-copied so the result never aliases a layer's data.

    Example:
        >>> fill_missing({"site_name": "Override"}, {"site_name": "Default", "theme": "basic"})
        {'site_name': 'Override', 'theme': 'basic'}
    """
    for key, value in lower.items():
        if key not in accumulator:
            accumulator[key] = copy.deepcopy(value)
    return accumulator


__all__ = ["deep_merge", "fill_missing"]
