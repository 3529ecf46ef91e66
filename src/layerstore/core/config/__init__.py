"""layerstore configuration.

Usage:
    from layerstore.core.config import load_layers_config

    config = load_layers_config("layers.yaml")
    store = config.open()              # uses the file's `storage` URL
    store = config.open("layer:active")
"""
from __future__ import annotations

from .loader import (
    ENV_CONFIG,
    ENV_STORAGE,
    LayerDefinition,
    LayersConfig,
    config_paths_from_env,
    load_default_config,
    load_layers_config,
)

__all__ = [
    "ENV_CONFIG",
    "ENV_STORAGE",
    "LayerDefinition",
    "LayersConfig",
    "config_paths_from_env",
    "load_default_config",
    "load_layers_config",
]
