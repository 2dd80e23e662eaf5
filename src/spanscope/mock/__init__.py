"""In-memory tracer for testing instrumented code."""

from .config import MockTracerConfig
from .hooks import NullHook, SpanHook
from .propagators import BinaryPropagator, Propagator, TextMapPropagator
from .span import MockSpan, MockSpanContext
from .tracer import MockSpanBuilder, MockTracer

__all__ = [
    "BinaryPropagator",
    "MockSpan",
    "MockSpanBuilder",
    "MockSpanContext",
    "MockTracer",
    "MockTracerConfig",
    "NullHook",
    "Propagator",
    "SpanHook",
    "TextMapPropagator",
]
