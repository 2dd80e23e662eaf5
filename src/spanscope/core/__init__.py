"""Capability contracts: spans, scopes and tracers."""

from .scope import Scope, ScopeManager
from .span import Span, SpanContext
from .tracer import Reference, ReferenceType, SpanBuilder, Tracer, child_of, follows_from

__all__ = [
    "Reference",
    "ReferenceType",
    "Scope",
    "ScopeManager",
    "Span",
    "SpanBuilder",
    "SpanContext",
    "Tracer",
    "child_of",
    "follows_from",
]
