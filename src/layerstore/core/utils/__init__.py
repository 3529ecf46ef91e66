"""Utility helpers for layerstore core.

- io/: File I/O operations (atomic writes, YAML)
- merge: dictionary merge helpers shared by the resolver and config loader
"""
from __future__ import annotations

from .merge import deep_merge, fill_missing

__all__ = ["deep_merge", "fill_missing"]
