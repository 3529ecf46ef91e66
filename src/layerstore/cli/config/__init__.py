"""Config object commands: show, list, exists, set, delete, rename, import-archive."""
