"""MockTracer — an in-memory tracer for testing instrumentation."""

from __future__ import annotations

import itertools
import threading
import warnings

from ..core.scope import ScopeManager
from ..core.span import SpanContext
from ..core.tracer import SpanBuilder, Tracer
from ..exceptions import UnsupportedFormatError
from ..models import SpanCollection
from ..propagation import Format
from ..scope_managers import ThreadLocalScopeManager
from .config import MockTracerConfig
from .hooks import SpanHook
from .propagators import BinaryPropagator, Propagator, TextMapPropagator
from .span import MockSpan, MockSpanContext


class MockTracer(Tracer):
    """Records every finished span so tests can assert on it.

    Error-handling contract
    ----------------------
    - Misuse (unknown format, carrier of the wrong shape, corrupt propagated
      state) raises immediately.
    - Hook failures are swallowed with ``warnings.warn`` so that the traced
      code is never affected by the tracer.
    """

    def __init__(
        self,
        scope_manager: ScopeManager | None = None,
        config: MockTracerConfig | None = None,
        hooks: list[SpanHook] | None = None,
    ) -> None:
        self.config = config or MockTracerConfig()
        self.hooks: list[SpanHook] = list(hooks or [])
        self._scope_manager = scope_manager or ThreadLocalScopeManager()
        self._propagators: dict[Format, Propagator] = {
            Format.TEXT_MAP: TextMapPropagator(self.config),
            Format.HTTP_HEADERS: TextMapPropagator(self.config, http_headers=True),
            Format.BINARY: BinaryPropagator(self.config),
        }
        self._finished: list[MockSpan] = []
        self._lock = threading.Lock()
        self._ids = itertools.count(self.config.first_id)

    @property
    def scope_manager(self) -> ScopeManager:
        return self._scope_manager

    def register_propagator(self, format: Format, propagator: Propagator) -> None:
        self._propagators[format] = propagator

    def build_span(self, operation_name: str) -> SpanBuilder:
        return MockSpanBuilder(self, operation_name)

    def inject(self, span_context: SpanContext, format: Format, carrier: object) -> None:
        propagator = self._propagator(format)
        format.check_carrier(carrier, writable=True)
        if not isinstance(span_context, MockSpanContext):
            raise TypeError(
                f"MockTracer cannot inject {type(span_context).__name__}; expected MockSpanContext"
            )
        propagator.inject(span_context, carrier)

    def extract(self, format: Format, carrier: object) -> MockSpanContext | None:
        propagator = self._propagator(format)
        format.check_carrier(carrier)
        return propagator.extract(carrier)

    def finished_spans(self) -> list[MockSpan]:
        with self._lock:
            return list(self._finished)

    def records(self, name: str = "") -> SpanCollection:
        """Snapshot the finished spans as a serializable collection."""
        return SpanCollection(name=name, spans=[span.to_record() for span in self.finished_spans()])

    def reset(self) -> None:
        with self._lock:
            self._finished.clear()

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)

    def _propagator(self, format: Format) -> Propagator:
        try:
            return self._propagators[format]
        except KeyError:
            raise UnsupportedFormatError(f"MockTracer does not support format {format!r}") from None

    def _span_started(self, span: MockSpan) -> None:
        self._dispatch("on_span_started", span)

    def _span_finished(self, span: MockSpan) -> None:
        with self._lock:
            self._finished.append(span)
            limit = self.config.max_finished_spans
            if limit is not None and len(self._finished) > limit:
                del self._finished[: len(self._finished) - limit]
        self._dispatch("on_span_finished", span)

    def _dispatch(self, event: str, span: MockSpan) -> None:
        for hook in self.hooks:
            try:
                getattr(hook, event)(span)
            except Exception:
                warnings.warn(f"spanscope: hook error in {event}", stacklevel=3)


class MockSpanBuilder(SpanBuilder):
    """Starts MockSpans, inheriting trace id and baggage from references."""

    tracer: MockTracer

    def start(self) -> MockSpan:
        references = self.resolved_references()
        parents = [
            reference.referenced_context
            for reference in references
            if isinstance(reference.referenced_context, MockSpanContext)
        ]
        baggage: dict[str, str] = {}
        for parent in parents:
            baggage.update(parent.baggage)

        span_id = self.tracer.next_id()
        if parents:
            trace_id = parents[0].trace_id
            parent_id: int | None = parents[0].span_id
        else:
            # Root spans share their id with the trace.
            trace_id = span_id
            parent_id = None

        span = MockSpan(
            tracer=self.tracer,
            operation_name=self.operation_name,
            context=MockSpanContext(trace_id, span_id, baggage),
            parent_id=parent_id,
            start_time=self.start_time,
            tags=self.tags,
            references=references,
        )
        self.tracer._span_started(span)
        return span
