from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from layerstore.core.utils.io import ensure_directory

_CONFIGURED_LOG_PATH: Optional[str] = None
_LAYERSTORE_HANDLER: Optional[logging.Handler] = None
_JSON_MODE_NULL_HANDLER: Optional[logging.Handler] = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def _install(handler: logging.Handler, level: str) -> None:
    global _LAYERSTORE_HANDLER

    logger = logging.getLogger("layerstore")
    logger.setLevel(_level_from_name(level))

    # Replace the handler installed by a previous call.
    if _LAYERSTORE_HANDLER is not None:
        logger.removeHandler(_LAYERSTORE_HANDLER)
        _LAYERSTORE_HANDLER.close()

    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    _LAYERSTORE_HANDLER = handler


def configure_stdlib_logging(*, log_path: Optional[Path] = None, level: str = "WARNING") -> None:
    """Route ``layerstore.*`` log records to ``log_path`` (or stderr when None).

    Idempotent per-process: configuring the same file again only updates
    the level.
    Stdout is never used so ``--json`` output stays machine-readable.
    """
    global _CONFIGURED_LOG_PATH

    if log_path is None:
        _install(logging.StreamHandler(sys.stderr), level)
        _CONFIGURED_LOG_PATH = None
        return

    resolved = str(Path(log_path).resolve())
    if _CONFIGURED_LOG_PATH == resolved and _LAYERSTORE_HANDLER is not None:
        logging.getLogger("layerstore").setLevel(_level_from_name(level))
        _LAYERSTORE_HANDLER.setLevel(_level_from_name(level))
        return

    ensure_directory(Path(resolved).parent)
    _install(logging.FileHandler(resolved, encoding="utf-8"), level)
    _CONFIGURED_LOG_PATH = resolved


def suppress_lastresort_in_json_mode() -> None:
    """Keep logging's lastResort handler from writing to stderr under ``--json``.

    Without any handler, WARNING records reach stderr through
    ``logging.lastResort`` and corrupt the JSON error document. A NullHandler
    on the root logger is enough to disable it; explicitly configured
    handlers keep working.
    """
    global _JSON_MODE_NULL_HANDLER

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER is not None:
        return
    _JSON_MODE_NULL_HANDLER = logging.NullHandler()
    root.addHandler(_JSON_MODE_NULL_HANDLER)


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: clear the configured handlers."""
    global _CONFIGURED_LOG_PATH, _LAYERSTORE_HANDLER, _JSON_MODE_NULL_HANDLER
    if _JSON_MODE_NULL_HANDLER is not None:
        logging.getLogger().removeHandler(_JSON_MODE_NULL_HANDLER)
        _JSON_MODE_NULL_HANDLER = None
    logger = logging.getLogger("layerstore")
    if _LAYERSTORE_HANDLER is not None:
        logger.removeHandler(_LAYERSTORE_HANDLER)
        _LAYERSTORE_HANDLER.close()
    logger.setLevel(logging.NOTSET)
    _CONFIGURED_LOG_PATH = None
    _LAYERSTORE_HANDLER = None


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests", "suppress_lastresort_in_json_mode"]
