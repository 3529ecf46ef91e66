"""Layered config storage.

``LayeredStore`` stacks several storages into one logical store. Layers are
named by a storage specification such as::

    layered:/overrides/active/defaults

Layer order is precedence order, highest first. The resolver applies one
policy per operation:

- exists / list_all: union across every layer
- read: per-key overlay; a key from a higher layer is never replaced by a
  lower layer's value for the same key
- get_modified_time: first layer that has the object
- write / write_multiple / delete / delete_all / import_archive: routed to
  the mutable layer (the first layer that is not immutable)
- rename: every mutable layer that has the object

Errors raised by a layer propagate unchanged and abort the aggregate
operation. No locking is done here; a layer changing between ``exists`` and
``read`` may yield a mixed snapshot.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..codec import decode as _decode
from ..codec import encode as _encode
from ..exceptions import ConfigurationError, ImmutableStoreError, LayerResolutionError
from ..utils.merge import fill_missing
from .protocols import ConfigData, LayerLookup, Storage

logger = logging.getLogger(__name__)

SCHEME = "layered"

Layer = Tuple[str, Storage]


def parse_storage_spec(spec: str, scheme: str = SCHEME) -> Tuple[str, ...]:
    """Split ``<scheme>:/<layer1>/<layer2>/...`` into layer names.

    Empty segments are ignored and repeated names keep their first position.

    Raises:
        ConfigurationError: If ``spec`` is not a string, uses another scheme,
            or names no layers.
    """
    if not isinstance(spec, str):
        raise ConfigurationError(
            f"Storage specification must be a string, got {type(spec).__name__}",
        )
    found, sep, path = spec.partition(":")
    if not sep or found.strip() != scheme:
        raise ConfigurationError(
            f"Malformed storage specification '{spec}': expected '{scheme}:/<layer>/...'",
            context={"spec": spec},
        )

    names: List[str] = []
    for token in path.split("/"):
        token = token.strip()
        if token and token not in names:
            names.append(token)
    if not names:
        raise ConfigurationError(
            f"Storage specification '{spec}' does not name any layers",
            context={"spec": spec},
        )
    return tuple(names)


class _StaticLookup:
    """Lookup over an explicit mapping of already-built layers."""

    def __init__(self, layers: Mapping[str, Storage]) -> None:
        self._layers = dict(layers)

    def resolve(self, name: str) -> Storage:
        try:
            return self._layers[name]
        except KeyError:
            raise LayerResolutionError(f"Unknown layer '{name}'", layer=name) from None


class LayeredStore:
    """Resolve config operations across an ordered stack of layers."""

    def __init__(self, spec: str, lookup: LayerLookup, *, fmt: str = "yaml") -> None:
        """Build the layer stack.

        Args:
            spec: Storage specification, e.g. ``layered:/overrides/active``.
            lookup: Collaborator that turns a layer name into a storage.
            fmt: Codec used by ``encode``/``decode``.

        Raises:
            ConfigurationError: If ``spec`` is malformed or a layer cannot be
                resolved. No partially built store is returned.
        """
        names = parse_storage_spec(spec)

        layers: List[Layer] = []
        mutable: Optional[Layer] = None
        for name in names:
            try:
                layer = lookup.resolve(name)
            except LayerResolutionError as exc:
                raise ConfigurationError(
                    f"Cannot resolve layer '{name}' in '{spec}': {exc}",
                    context={"spec": spec, "layer": name},
                ) from exc
            if not isinstance(layer, Storage):
                raise ConfigurationError(
                    f"Layer '{name}' resolved to {type(layer).__name__}, which is not a config storage",
                    context={"spec": spec, "layer": name},
                )
            layers.append((name, layer))
            if mutable is None and not layer.is_immutable():
                mutable = (name, layer)

        self.spec = spec
        self.fmt = fmt
        self._layers: Tuple[Layer, ...] = tuple(layers)
        self._mutable = mutable
        self._initialized = False

        logger.info(
            "Layered storage %s: layers=%s mutable=%s",
            spec,
            ",".join(self.layer_names),
            mutable[0] if mutable else "<none>",
        )

    @classmethod
    def from_layers(cls, layers: Iterable[Layer], *, fmt: str = "yaml") -> "LayeredStore":
        """Build a store from ``(name, storage)`` pairs, highest precedence first.

        Raises:
            ConfigurationError: If a name is empty, contains ``/`` or has
                surrounding whitespace, since it could not round-trip through
                a storage specification.
        """
        pairs = list(layers)
        lookup: Dict[str, Storage] = {}
        for name, layer in pairs:
            if not isinstance(name, str) or not name or "/" in name or name != name.strip():
                raise ConfigurationError(f"Invalid layer name: {name!r}", context={"layer": name})
            lookup.setdefault(name, layer)
        spec = f"{SCHEME}:/" + "/".join(name for name, _ in pairs)
        return cls(spec, _StaticLookup(lookup), fmt=fmt)

    def __repr__(self) -> str:
        return f"LayeredStore({self.spec!r})"

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return self._layers

    @property
    def layer_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self._layers)

    @property
    def mutable_layer(self) -> Optional[Layer]:
        """``(name, storage)`` of the layer receiving writes, or None."""
        return self._mutable

    def _require_mutable(self, operation: str) -> Storage:
        if self._mutable is None:
            logger.warning("Refusing %s on %s: every layer is immutable", operation, self.spec)
            raise ImmutableStoreError(
                f"Cannot {operation}: no mutable layer in '{self.spec}'",
                operation=operation,
                context={"spec": self.spec},
            )
        name, layer = self._mutable
        logger.debug("Routing %s to layer '%s'", operation, name)
        return layer

    # ---------- Lifecycle ----------

    def is_immutable(self) -> bool:
        return self._mutable is None

    def initialize_storage(self) -> None:
        """Run every layer's initialization hook in precedence order.

        Calling this twice is safe when every layer's own hook is idempotent,
        which holds for the bundled memory and file storages.
        """
        for name, layer in self._layers:
            logger.debug("Initializing layer '%s'", name)
            layer.initialize_storage()
        self._initialized = True

    def is_initialized(self) -> bool:
        return self._initialized

    # ---------- Reads ----------

    def exists(self, name: str) -> bool:
        return any(layer.exists(name) for _, layer in self._layers)

    def read(self, name: str) -> Optional[ConfigData]:
        """Return the per-key overlay of ``name`` across all layers.

        Returns None when no layer contributed any key.
        """
        merged: ConfigData = {}
        for layer_name, layer in self._layers:
            if not layer.exists(name):
                continue
            data = layer.read(name)
            if data is None:
                # Removed between exists() and read().
                continue
            logger.debug("Merging '%s' from layer '%s'", name, layer_name)
            fill_missing(merged, data)
        return merged or None

    def read_multiple(self, names: Iterable[str]) -> Dict[str, ConfigData]:
        out: Dict[str, ConfigData] = {}
        for name in names:
            data = self.read(name)
            if data:
                out[name] = data
        return out

    def get_modified_time(self, name: str) -> Optional[float]:
        """Modification time from the highest layer holding ``name``, else None."""
        for _, layer in self._layers:
            if layer.exists(name):
                return layer.get_modified_time(name)
        return None

    def list_all(self, prefix: str = "") -> List[str]:
        names = set()
        for _, layer in self._layers:
            names.update(layer.list_all(prefix))
        return sorted(names)

    # ---------- Writes ----------

    def write(self, name: str, data: Mapping[str, Any]) -> bool:
        return self._require_mutable("write").write(name, data)

    def write_multiple(self, data: Mapping[str, Mapping[str, Any]]) -> bool:
        return self._require_mutable("write_multiple").write_multiple(data)

    def delete(self, name: str) -> bool:
        """Delete ``name`` from the mutable layer.

        Returns False, without raising, when every layer is immutable.
        Copies held by other layers stay visible.
        """
        if self._mutable is None:
            logger.debug("delete(%s) ignored: %s has no mutable layer", name, self.spec)
            return False
        return self._mutable[1].delete(name)

    def rename(self, name: str, new_name: str) -> bool:
        """Rename ``name`` in every mutable layer that holds it.

        Each qualifying layer is attempted even after a failure; the result
        is the AND of their results. With no qualifying layer the result is
        True.
        """
        result = True
        for layer_name, layer in self._layers:
            if layer.is_immutable() or not layer.exists(name):
                continue
            renamed = layer.rename(name, new_name)
            if not renamed:
                logger.warning("Layer '%s' failed to rename '%s' to '%s'", layer_name, name, new_name)
            result = result and renamed
        return result

    def delete_all(self, prefix: str = "") -> bool:
        return self._require_mutable("delete_all").delete_all(prefix)

    def import_archive(self, uri: str) -> bool:
        return self._require_mutable("import_archive").import_archive(uri)

    def export_archive(self, uri: str) -> bool:
        """Not supported: a merged view has no single archive to export."""
        raise ImmutableStoreError(
            f"Cannot export '{self.spec}': layered storage has no single source to archive",
            operation="export_archive",
            context={"spec": self.spec, "uri": uri},
        )

    # ---------- Codec ----------

    def encode(self, data: Mapping[str, Any]) -> str:
        return _encode(data, self.fmt)

    def decode(self, raw: str) -> ConfigData:
        return _decode(raw, self.fmt)


__all__ = ["LayeredStore", "parse_storage_spec", "SCHEME"]
