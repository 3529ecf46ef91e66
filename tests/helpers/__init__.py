"""Test helper modules for the layerstore test suite.

- layers: storage doubles that record calls and can be told to fail
"""
from __future__ import annotations

from helpers.layers import RecordingStorage, ops

__all__ = ["RecordingStorage", "ops"]
