"""Builtin carrier formats for ``Tracer.inject`` and ``Tracer.extract``."""

from __future__ import annotations

from enum import StrEnum

from ..exceptions import InvalidCarrierError
from .carriers import TextMap

BinaryCarrier = bytes | bytearray | memoryview


class Format(StrEnum):
    """Closed set of carrier encodings, each bound to one carrier shape.

    ``TEXT_MAP`` puts no constraints on keys or values. ``HTTP_HEADERS`` uses
    the same shape, but keys and values written to it must be usable as HTTP
    headers as-is, and key casing may not survive the transport. ``BINARY``
    uses an opaque buffer; ``inject`` appends to a ``bytearray``.

    Every tracer must support at least ``TEXT_MAP`` and ``BINARY``.
    """

    TEXT_MAP = "text_map"
    HTTP_HEADERS = "http_headers"
    BINARY = "binary"

    @property
    def carrier_type(self) -> type | tuple[type, ...]:
        if self is Format.BINARY:
            return (bytes, bytearray, memoryview)
        return TextMap

    def check_carrier(self, carrier: object, *, writable: bool = False) -> None:
        """Raise ``InvalidCarrierError`` if ``carrier`` does not fit this format."""
        expected = self.carrier_type
        if writable and self is Format.BINARY:
            expected = bytearray
        if not isinstance(carrier, expected):
            raise InvalidCarrierError(
                f"Carrier of type {type(carrier).__name__} is not valid for format {self.name}"
            )

    def __repr__(self) -> str:
        return f"Format.{self.name}"
