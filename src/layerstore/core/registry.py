"""Layer registry and storage URL dispatch.

``LayerRegistry`` is the lookup collaborator handed to ``LayeredStore``: it
maps layer names to storages. Entries are either storage instances or
zero-argument factories; a factory runs on first resolution and its result
is reused afterwards.

``open_storage`` turns a storage URL into a storage::

    layered:/overrides/active   LayeredStore over registry layers
    layer:active                a single registry layer
    memory:                     a fresh MemoryStorage
    file:/srv/config            FileStorage rooted at /srv/config
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional, Union

from .exceptions import ConfigurationError, LayerResolutionError
from .storage import FileStorage, LayeredStore, MemoryStorage, Storage
from .storage.layered import SCHEME as LAYERED_SCHEME

logger = logging.getLogger(__name__)

LayerFactory = Callable[[], Storage]
LayerEntry = Union[Storage, LayerFactory]


def _is_storage(obj: object) -> bool:
    # Classes carry the protocol methods too; only instances count.
    return isinstance(obj, Storage) and not isinstance(obj, type)


class LayerRegistry:
    """Name → storage lookup with lazily built entries.

    Example:
        registry = LayerRegistry()
        registry.register("defaults", FileStorage("config/defaults", immutable=True))
        registry.register("active", lambda: FileStorage("config/active"))
        store = registry.open("layered:/active/defaults")
    """

    def __init__(self, layers: Optional[Mapping[str, LayerEntry]] = None) -> None:
        self._entries: Dict[str, LayerEntry] = {}
        self._resolved: Dict[str, Storage] = {}
        for name, entry in (layers or {}).items():
            self.register(name, entry)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LayerRegistry({', '.join(self.names())})"

    def names(self) -> List[str]:
        return sorted(self._entries)

    def register(self, name: str, entry: LayerEntry, *, replace: bool = False) -> None:
        """Register a storage instance or factory under ``name``.

        Raises:
            ConfigurationError: If ``name`` is empty, contains ``/``, is already
                registered (unless ``replace``), or ``entry`` is neither a
                storage nor callable.
        """
        if not isinstance(name, str) or not name.strip() or "/" in name:
            raise ConfigurationError(f"Invalid layer name: {name!r}", context={"layer": name})
        if name in self._entries and not replace:
            raise ConfigurationError(f"Layer '{name}' is already registered", context={"layer": name})
        if not _is_storage(entry) and not callable(entry):
            raise ConfigurationError(
                f"Layer '{name}' must be a config storage or a factory, got {type(entry).__name__}",
                context={"layer": name},
            )
        self._entries[name] = entry
        self._resolved.pop(name, None)

    def unregister(self, name: str) -> bool:
        self._resolved.pop(name, None)
        return self._entries.pop(name, None) is not None

    def resolve(self, name: str) -> Storage:
        """Return the storage registered as ``name``.

        Raises:
            LayerResolutionError: If ``name`` is unknown or its factory does not
                produce a config storage.
        """
        if name in self._resolved:
            return self._resolved[name]
        try:
            entry = self._entries[name]
        except KeyError:
            known = ", ".join(self.names()) or "<none>"
            raise LayerResolutionError(
                f"Unknown layer '{name}' (known: {known})",
                layer=name,
            ) from None

        if _is_storage(entry):
            layer = entry
        else:
            logger.debug("Building layer '%s' from factory", name)
            layer = entry()
            if not _is_storage(layer):
                raise LayerResolutionError(
                    f"Factory for layer '{name}' returned {type(layer).__name__}, not a config storage",
                    layer=name,
                )
        self._resolved[name] = layer
        return layer

    def open(self, url: str, *, fmt: str = "yaml") -> Storage:
        """Shorthand for ``open_storage(url, self, fmt=fmt)``."""
        return open_storage(url, self, fmt=fmt)


def open_storage(url: str, registry: Optional[LayerRegistry] = None, *, fmt: str = "yaml") -> Storage:
    """Build the storage described by ``url``.

    Raises:
        ConfigurationError: If the URL is malformed, uses an unknown scheme,
            or references layers the registry cannot resolve.
    """
    if not isinstance(url, str) or ":" not in url:
        raise ConfigurationError(f"Malformed storage URL: {url!r}", context={"url": url})
    scheme, _, rest = url.partition(":")
    scheme = scheme.strip()

    if scheme == LAYERED_SCHEME:
        if registry is None:
            raise ConfigurationError(
                f"Storage URL '{url}' needs a layer registry",
                context={"url": url},
            )
        return LayeredStore(url, registry, fmt=fmt)

    if scheme == "layer":
        name = rest.strip("/ ")
        if registry is None or not name:
            raise ConfigurationError(f"Malformed layer URL: {url!r}", context={"url": url})
        try:
            return registry.resolve(name)
        except LayerResolutionError as exc:
            raise ConfigurationError(str(exc), context={"url": url, "layer": name}) from exc

    if scheme == "memory":
        return MemoryStorage()

    if scheme == "file":
        path = rest[2:] if rest.startswith("//") else rest
        if not path.strip():
            raise ConfigurationError(f"File storage URL has no path: {url!r}", context={"url": url})
        return FileStorage(path, fmt=fmt)

    raise ConfigurationError(
        f"Unknown storage scheme '{scheme}' in {url!r}",
        context={"url": url, "scheme": scheme},
    )


__all__ = ["LayerRegistry", "open_storage", "LayerFactory"]
