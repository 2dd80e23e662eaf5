"""Carrier formats and adapters for cross-process propagation."""

from .carriers import TextMap, TextMapExtractAdapter, TextMapInjectAdapter
from .format import BinaryCarrier, Format

__all__ = [
    "BinaryCarrier",
    "Format",
    "TextMap",
    "TextMapExtractAdapter",
    "TextMapInjectAdapter",
]
