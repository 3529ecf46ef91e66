"""Result and error printing for layerstore commands.

Results go to stdout and errors to stderr. Under ``--json`` both are single
JSON documents so scripts can parse them.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional, TextIO

from layerstore.core.exceptions import LayerStoreError


class OutputFormatter:
    """Print command results as text or JSON."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dump(self, payload: Any, stream: TextIO) -> None:
        print(json.dumps(payload, indent=self.indent, default=str), file=stream)

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        """Print ``message``, or ``{"status": ..., **data}`` in JSON mode."""
        if self.json_mode:
            self._dump({"status": status, **data}, sys.stdout)
        else:
            print(message)

    def error(self, error: Exception, message: Optional[str] = None, *, error_code: str = "error") -> None:
        """Report ``error`` on stderr.

        In JSON mode a :class:`LayerStoreError` also contributes its class
        name as ``code`` and its ``context``.
        """
        text = message or str(error)
        if not self.json_mode:
            print(f"Error: {text}", file=sys.stderr)
            return

        payload: Dict[str, Any] = {"error": error_code, "message": text}
        if isinstance(error, LayerStoreError):
            details = error.to_json_error()
            payload["code"] = details["code"]
            payload["context"] = details["context"]
        self._dump(payload, sys.stderr)

    def json_output(self, data: Any) -> None:
        self._dump(data, sys.stdout)

    def text(self, message: str) -> None:
        """Print ``message`` unless in JSON mode."""
        if not self.json_mode:
            print(message)


__all__ = ["OutputFormatter"]
