"""
layerstore - layered configuration storage

Composes several configuration backends ("layers") into a single logical
store: reads are merged key by key in precedence order, writes go to the
first mutable layer.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
