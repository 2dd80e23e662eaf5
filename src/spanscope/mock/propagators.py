"""Propagators that move MockSpanContext state in and out of carriers."""

from __future__ import annotations

import abc
import struct
from typing import cast
from urllib.parse import quote, unquote

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import SpanContextCorruptedError
from ..propagation import BinaryCarrier, TextMap
from .config import MockTracerConfig
from .span import MockSpanContext

_LENGTH_PREFIX = struct.Struct(">I")


class Propagator(abc.ABC):
    """Serializes one carrier shape for a MockTracer."""

    @abc.abstractmethod
    def inject(self, span_context: MockSpanContext, carrier: object) -> None: ...

    @abc.abstractmethod
    def extract(self, carrier: object) -> MockSpanContext | None: ...


class TextMapPropagator(Propagator):
    """Writes ids and baggage as prefixed string entries.

    With ``http_headers`` enabled, key lookup on extraction ignores case and
    baggage values are URL-escaped.
    """

    def __init__(
        self, config: MockTracerConfig | None = None, *, http_headers: bool = False
    ) -> None:
        self._config = config or MockTracerConfig()
        self.http_headers = http_headers

    @property
    def trace_id_key(self) -> str:
        return f"{self._config.prefix_tracer_state}traceid"

    @property
    def span_id_key(self) -> str:
        return f"{self._config.prefix_tracer_state}spanid"

    def inject(self, span_context: MockSpanContext, carrier: object) -> None:
        text_map = cast(TextMap, carrier)
        text_map.put(self.trace_id_key, str(span_context.trace_id))
        text_map.put(self.span_id_key, str(span_context.span_id))
        for key, value in span_context.baggage_items():
            text_map.put(f"{self._config.prefix_baggage}{key}", self._encode(value))

    def extract(self, carrier: object) -> MockSpanContext | None:
        trace_id: str | None = None
        span_id: str | None = None
        baggage: dict[str, str] = {}
        trace_id_key = self._normalize(self.trace_id_key)
        span_id_key = self._normalize(self.span_id_key)
        baggage_prefix = self._normalize(self._config.prefix_baggage)

        for raw_key, value in cast(TextMap, carrier):
            key = self._normalize(raw_key)
            if key == trace_id_key:
                trace_id = value
            elif key == span_id_key:
                span_id = value
            elif key.startswith(baggage_prefix):
                baggage[raw_key[len(baggage_prefix) :]] = self._decode(value)

        if trace_id is None and span_id is None:
            return None
        if trace_id is None or span_id is None:
            raise SpanContextCorruptedError(
                f"Carrier holds only one of {self.trace_id_key!r} and {self.span_id_key!r}"
            )
        return MockSpanContext(_parse_id(trace_id), _parse_id(span_id), baggage)

    def _normalize(self, key: str) -> str:
        return key.lower() if self.http_headers else key

    def _encode(self, value: str) -> str:
        return quote(value, safe="") if self.http_headers else value

    def _decode(self, value: str) -> str:
        return unquote(value) if self.http_headers else value


class _BinaryState(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid")

    version: int
    trace_id: int = Field(ge=1)
    span_id: int = Field(ge=1)
    baggage: dict[str, str] = Field(default_factory=dict)


class BinaryPropagator(Propagator):
    """Appends a length-prefixed JSON document to a bytearray.

    An empty carrier means no propagated state. Anything else that is not a
    complete document of the configured version is corrupt.
    """

    def __init__(self, config: MockTracerConfig | None = None) -> None:
        self._config = config or MockTracerConfig()

    def inject(self, span_context: MockSpanContext, carrier: object) -> None:
        state = _BinaryState(
            version=self._config.binary_version,
            trace_id=span_context.trace_id,
            span_id=span_context.span_id,
            baggage=dict(span_context.baggage),
        )
        payload = state.model_dump_json().encode("utf-8")
        buffer = cast(bytearray, carrier)
        buffer.extend(_LENGTH_PREFIX.pack(len(payload)))
        buffer.extend(payload)

    def extract(self, carrier: object) -> MockSpanContext | None:
        data = bytes(cast(BinaryCarrier, carrier))
        if not data:
            return None
        if len(data) < _LENGTH_PREFIX.size:
            raise SpanContextCorruptedError("Binary carrier is too short for a length prefix")
        (length,) = _LENGTH_PREFIX.unpack_from(data)
        payload = data[_LENGTH_PREFIX.size :]
        if len(payload) != length:
            raise SpanContextCorruptedError(
                f"Binary carrier declares {length} bytes but holds {len(payload)}"
            )
        try:
            state = _BinaryState.model_validate_json(payload)
        except ValidationError as exc:
            raise SpanContextCorruptedError(f"Failed to parse binary span context: {exc}") from exc
        if state.version != self._config.binary_version:
            raise SpanContextCorruptedError(
                f"Unsupported binary span context version {state.version}, "
                f"expected {self._config.binary_version}"
            )
        return MockSpanContext(state.trace_id, state.span_id, state.baggage)


def _parse_id(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise SpanContextCorruptedError(f"Invalid span context id: {value!r}") from exc
    if parsed < 1:
        raise SpanContextCorruptedError(f"Invalid span context id: {value!r}")
    return parsed
