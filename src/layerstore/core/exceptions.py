"""Exception hierarchy for layerstore.

Every error carries a ``context`` dict with the identifiers involved (spec,
layer, path, operation ...) and also derives from the closest builtin, so
callers may catch either ``LayerStoreError`` or e.g. ``PermissionError``.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class LayerStoreError(Exception):
    """Base exception for layerstore."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.context = dict(context or {})

    def to_json_error(self) -> Dict[str, Any]:
        """``{"message", "code", "context"}`` payload for ``--json`` output."""
        return {
            "message": str(self),
            "code": type(self).__name__,
            "context": self.context,
        }


class ConfigurationError(LayerStoreError, ValueError):
    """A storage specification or layers file is invalid."""


class LayerResolutionError(LayerStoreError, LookupError):
    """A layer name does not resolve to a storage."""

    def __init__(
        self,
        message: str = "",
        *,
        layer: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        ctx = dict(context or {})
        if layer is not None:
            ctx["layer"] = layer
        super().__init__(message, context=ctx)
        self.layer = layer


class ImmutableStoreError(LayerStoreError, PermissionError):
    """A write-class operation targeted a store with no writable layer."""

    def __init__(
        self,
        message: str = "",
        *,
        operation: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        ctx = dict(context or {})
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)
        self.operation = operation


class SerializationError(LayerStoreError, ValueError):
    """Config data could not be encoded or decoded."""


class StorageError(LayerStoreError, OSError):
    """A backend could not complete an I/O operation."""


__all__ = [
    "LayerStoreError",
    "ConfigurationError",
    "LayerResolutionError",
    "ImmutableStoreError",
    "SerializationError",
    "StorageError",
]
