"""Behaviourally inert tracer used until a real one is registered."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .core.scope import Scope, ScopeManager
from .core.span import Span, SpanContext
from .core.tracer import ReferenceType, SpanBuilder, Tracer
from .propagation import Format

_EMPTY_BAGGAGE: Mapping[str, str] = MappingProxyType({})


class NoopSpanContext(SpanContext):
    @property
    def baggage(self) -> Mapping[str, str]:
        return _EMPTY_BAGGAGE


class NoopSpan(Span):
    def __init__(self, tracer: Tracer, context: SpanContext) -> None:
        self._tracer = tracer
        self._context = context

    @property
    def context(self) -> SpanContext:
        return self._context

    @property
    def tracer(self) -> Tracer:
        return self._tracer

    def set_operation_name(self, operation_name: str) -> Span:
        return self

    def set_tag(self, key: str, value: object) -> Span:
        return self

    def log_kv(self, key_values: Mapping[str, object], timestamp: float | None = None) -> Span:
        return self

    def set_baggage_item(self, key: str, value: str) -> Span:
        return self

    def get_baggage_item(self, key: str) -> str | None:
        return None

    def finish(self, finish_time: float | None = None) -> None:
        pass


class NoopScope(Scope):
    def close(self) -> None:
        pass


class NoopScopeManager(ScopeManager):
    """Hands out one shared scope and never tracks activation."""

    def __init__(self, span: Span) -> None:
        self._scope = NoopScope(self, span)

    def activate(self, span: Span, finish_on_close: bool) -> Scope:
        return self._scope

    @property
    def active(self) -> Scope | None:
        return self._scope


class NoopSpanBuilder(SpanBuilder):
    def __init__(self, tracer: NoopTracer) -> None:
        super().__init__(tracer, "")
        self._noop_tracer = tracer

    def as_child_of(self, parent: Span | SpanContext | None) -> SpanBuilder:
        return self

    def add_reference(
        self, reference_type: ReferenceType, referenced_context: SpanContext | None
    ) -> SpanBuilder:
        return self

    def ignore_active_span(self) -> SpanBuilder:
        return self

    def with_tag(self, key: str, value: object) -> SpanBuilder:
        return self

    def with_start_timestamp(self, start_time: float) -> SpanBuilder:
        return self

    def start(self) -> Span:
        return self._noop_tracer.noop_span

    def start_active(self, finish_on_close: bool) -> Scope:
        tracer = self._noop_tracer
        return tracer.scope_manager.activate(tracer.noop_span, finish_on_close)


class NoopTracer(Tracer):
    """Tracer whose every operation is side-effect free.

    ``extract`` always returns ``None`` and ``inject`` leaves the carrier
    untouched.
    """

    def __init__(self) -> None:
        self.noop_span_context = NoopSpanContext()
        self.noop_span = NoopSpan(self, self.noop_span_context)
        self._scope_manager = NoopScopeManager(self.noop_span)

    @property
    def scope_manager(self) -> ScopeManager:
        return self._scope_manager

    def build_span(self, operation_name: str) -> SpanBuilder:
        return NoopSpanBuilder(self)

    def inject(self, span_context: SpanContext, format: Format, carrier: object) -> None:
        pass

    def extract(self, format: Format, carrier: object) -> SpanContext | None:
        return None

    def __repr__(self) -> str:
        return "NoopTracer()"
