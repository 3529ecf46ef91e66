"""Top-level layerstore commands."""
