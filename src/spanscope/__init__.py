"""spanscope — span activation, a process-wide tracer registry and carrier formats.

Convenience API (delegates to the global tracer registry):
    spanscope.global_tracer()                          -> constant forwarding tracer
    spanscope.register_global_tracer_if_absent(fn)     -> install a tracer at most once
    spanscope.is_global_tracer_registered()            -> has a real tracer been installed?

DI API (construct and pass your own tracer):
    from spanscope.mock import MockTracer
    tracer = MockTracer(scope_manager=ContextVarsScopeManager())
    with tracer.start_active_span("work") as scope:
        scope.span.set_tag("key", "value")
"""

from __future__ import annotations

from . import registry as _registry
from .core import (
    Reference,
    ReferenceType,
    Scope,
    ScopeManager,
    Span,
    SpanBuilder,
    SpanContext,
    Tracer,
    child_of,
    follows_from,
)
from .exceptions import (
    InvalidCarrierError,
    SpanContextCorruptedError,
    SpanscopeError,
    SpanscopeLoadError,
    TracerAlreadyRegisteredError,
    UnsupportedFormatError,
    UnsupportedOperationError,
)
from .noop import NoopScope, NoopScopeManager, NoopSpan, NoopSpanContext, NoopTracer
from .propagation import Format, TextMap, TextMapExtractAdapter, TextMapInjectAdapter
from .scope_managers import ContextVarsScopeManager, ThreadLocalScopeManager, propagate_context

global_tracer = _registry.get
is_global_tracer_registered = _registry.is_registered
register_global_tracer_if_absent = _registry.register_if_absent
register_global_tracer = _registry.register


def _reset_global_tracer() -> None:
    """Reset the global tracer. Used by test fixtures."""
    _registry._reset()


__all__ = [
    "ContextVarsScopeManager",
    "Format",
    "InvalidCarrierError",
    "NoopScope",
    "NoopScopeManager",
    "NoopSpan",
    "NoopSpanContext",
    "NoopTracer",
    "Reference",
    "ReferenceType",
    "Scope",
    "ScopeManager",
    "Span",
    "SpanBuilder",
    "SpanContext",
    "SpanContextCorruptedError",
    "SpanscopeError",
    "SpanscopeLoadError",
    "TextMap",
    "TextMapExtractAdapter",
    "TextMapInjectAdapter",
    "ThreadLocalScopeManager",
    "Tracer",
    "TracerAlreadyRegisteredError",
    "UnsupportedFormatError",
    "UnsupportedOperationError",
    "child_of",
    "follows_from",
    "global_tracer",
    "is_global_tracer_registered",
    "propagate_context",
    "register_global_tracer",
    "register_global_tracer_if_absent",
]
