"""Layers file loading.

A layers file declares the named layers a registry can resolve and,
optionally, the default storage URL::

    layers:
      defaults:
        kind: file
        path: config/defaults
        immutable: true
      active:
        kind: file
        path: config/active
    storage: "layered:/active/defaults"
    format: yaml

Several files may be given; they are deep-merged in order (later wins).
Relative layer paths are resolved against the directory of the file that
declared them. Invalid YAML and schema violations fail closed.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from layerstore.core.exceptions import ConfigurationError
from layerstore.core.registry import LayerRegistry, open_storage
from layerstore.core.schemas import validate_payload
from layerstore.core.storage import FileStorage, MemoryStorage, Storage
from layerstore.core.utils.io import PathLike, read_yaml
from layerstore.core.utils.merge import deep_merge

logger = logging.getLogger(__name__)

ENV_CONFIG = "LAYERSTORE_CONFIG"
ENV_STORAGE = "LAYERSTORE_STORAGE"

SCHEMA_NAME = "layers"


@dataclass(frozen=True)
class LayerDefinition:
    """A single declared layer."""

    name: str
    kind: str
    path: Optional[Path] = None
    immutable: bool = False
    fmt: str = "yaml"

    def build(self) -> Storage:
        if self.kind == "file":
            if self.path is None:
                raise ConfigurationError(
                    f"File layer '{self.name}' has no path",
                    context={"layer": self.name},
                )
            return FileStorage(self.path, immutable=self.immutable, fmt=self.fmt)
        if self.kind == "memory":
            return MemoryStorage(immutable=self.immutable)
        raise ConfigurationError(
            f"Unknown layer kind '{self.kind}' for layer '{self.name}'",
            context={"layer": self.name, "kind": self.kind},
        )


@dataclass(frozen=True)
class LayersConfig:
    """Validated contents of one or more layers files."""

    layers: Tuple[LayerDefinition, ...] = ()
    storage: Optional[str] = None
    fmt: str = "yaml"
    sources: Tuple[Path, ...] = ()

    def layer(self, name: str) -> Optional[LayerDefinition]:
        for definition in self.layers:
            if definition.name == name:
                return definition
        return None

    def build_registry(self) -> LayerRegistry:
        """Registry with one lazily built entry per declared layer."""
        registry = LayerRegistry()
        for definition in self.layers:
            registry.register(definition.name, definition.build)
        return registry

    def storage_url(self, explicit: Optional[str] = None) -> str:
        """Pick the storage URL: ``explicit`` → ``$LAYERSTORE_STORAGE`` → file setting.

        Raises:
            ConfigurationError: If none of them is set.
        """
        url = explicit or os.environ.get(ENV_STORAGE) or self.storage
        if not url:
            raise ConfigurationError(
                f"No storage URL configured (use --storage, ${ENV_STORAGE}, or 'storage' in a layers file)",
            )
        return url

    def open(self, url: Optional[str] = None) -> Storage:
        return open_storage(self.storage_url(url), self.build_registry(), fmt=self.fmt)


def _expand_layer_path(raw: str, *, base_dir: Path) -> Path:
    s = os.path.expandvars(str(raw)).strip()
    p = Path(s).expanduser()
    if not p.is_absolute():
        p = base_dir / p
    return p.resolve()


def _read_layers_file(path: Path) -> Dict[str, Any]:
    try:
        data = read_yaml(path, default={}, raise_on_error=True)
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Invalid YAML in layers file {path}: {exc}",
            context={"path": str(path)},
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Layers file {path} must contain a mapping, got {type(data).__name__}",
            context={"path": str(path)},
        )

    layers = data.get("layers")
    if isinstance(layers, dict):
        resolved: Dict[str, Any] = {}
        for name, entry in layers.items():
            if isinstance(entry, dict) and isinstance(entry.get("path"), str) and entry["path"].strip():
                entry = dict(entry)
                entry["path"] = str(_expand_layer_path(entry["path"], base_dir=path.parent))
            resolved[name] = entry
        data = dict(data)
        data["layers"] = resolved
    return data


def config_paths_from_env() -> List[Path]:
    """Paths listed in ``$LAYERSTORE_CONFIG`` (``os.pathsep`` separated)."""
    raw = os.environ.get(ENV_CONFIG, "")
    return [Path(p).expanduser() for p in raw.split(os.pathsep) if p.strip()]


def load_layers_config(*paths: PathLike) -> LayersConfig:
    """Load, merge, and validate layers files.

    Missing files are skipped.

    Raises:
        ConfigurationError: On invalid YAML or schema violations.
    """
    merged: Dict[str, Any] = {}
    sources: List[Path] = []
    for raw_path in paths:
        path = Path(raw_path).resolve()
        if not path.exists():
            logger.debug("Layers file %s not found; skipping", path)
            continue
        merged = deep_merge(merged, _read_layers_file(path))
        sources.append(path)

    validate_payload(merged, SCHEMA_NAME)

    fmt = merged.get("format", "yaml")
    definitions = tuple(
        LayerDefinition(
            name=name,
            kind=entry["kind"],
            path=Path(entry["path"]) if entry.get("path") else None,
            immutable=bool(entry.get("immutable", False)),
            fmt=entry.get("format", fmt),
        )
        for name, entry in (merged.get("layers") or {}).items()
    )
    logger.debug("Loaded %d layer definitions from %s", len(definitions), [str(s) for s in sources])
    return LayersConfig(
        layers=definitions,
        storage=merged.get("storage"),
        fmt=fmt,
        sources=tuple(sources),
    )


def load_default_config(extra: Iterable[PathLike] = ()) -> LayersConfig:
    """Load ``$LAYERSTORE_CONFIG`` files followed by ``extra``."""
    return load_layers_config(*config_paths_from_env(), *extra)


__all__ = [
    "ENV_CONFIG",
    "ENV_STORAGE",
    "LayerDefinition",
    "LayersConfig",
    "load_layers_config",
    "load_default_config",
    "config_paths_from_env",
]
