"""In-memory span and span context that record everything done to them."""

from __future__ import annotations

import json
import threading
import time
import warnings
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..core.span import Span, SpanContext
from ..core.tracer import Reference
from ..models import LogRecord, ReferenceRecord, SpanRecord

if TYPE_CHECKING:
    from .tracer import MockTracer


class MockSpanContext(SpanContext):
    """Trace and span identity plus baggage. Never mutated after creation."""

    def __init__(
        self, trace_id: int, span_id: int, baggage: Mapping[str, str] | None = None
    ) -> None:
        self.trace_id = trace_id
        self.span_id = span_id
        self._baggage: Mapping[str, str] = MappingProxyType(dict(baggage or {}))

    @property
    def baggage(self) -> Mapping[str, str]:
        return self._baggage

    def with_baggage_item(self, key: str, value: str) -> MockSpanContext:
        return MockSpanContext(self.trace_id, self.span_id, {**self._baggage, key: value})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MockSpanContext):
            return NotImplemented
        return (
            self.trace_id == other.trace_id
            and self.span_id == other.span_id
            and dict(self._baggage) == dict(other._baggage)
        )

    def __hash__(self) -> int:
        return hash((self.trace_id, self.span_id))

    def __repr__(self) -> str:
        return f"MockSpanContext(trace_id={self.trace_id}, span_id={self.span_id})"


class MockSpan(Span):
    """A span that keeps its tags, logs and baggage for later inspection.

    Mutating a finished span, or finishing it twice, emits a warning and is
    otherwise ignored.
    """

    def __init__(
        self,
        *,
        tracer: MockTracer,
        operation_name: str,
        context: MockSpanContext,
        parent_id: int | None = None,
        start_time: float | None = None,
        tags: Mapping[str, object] | None = None,
        references: list[Reference] | None = None,
    ) -> None:
        self._tracer = tracer
        self._context = context
        self.operation_name = operation_name
        self.parent_id = parent_id
        self.start_time = start_time if start_time is not None else time.time()
        self.finish_time: float | None = None
        self.tags: dict[str, object] = dict(tags or {})
        self.logs: list[LogRecord] = []
        self.references = list(references or [])
        self._lock = threading.Lock()

    @property
    def context(self) -> MockSpanContext:
        return self._context

    @property
    def tracer(self) -> MockTracer:
        return self._tracer

    @property
    def finished(self) -> bool:
        return self.finish_time is not None

    def set_operation_name(self, operation_name: str) -> MockSpan:
        with self._lock:
            if self._check_not_finished("set_operation_name"):
                self.operation_name = operation_name
        return self

    def set_tag(self, key: str, value: object) -> MockSpan:
        with self._lock:
            if self._check_not_finished("set_tag"):
                self.tags[key] = value
        return self

    def log_kv(self, key_values: Mapping[str, object], timestamp: float | None = None) -> MockSpan:
        with self._lock:
            if self._check_not_finished("log_kv"):
                self.logs.append(
                    LogRecord(
                        timestamp=float(timestamp) if timestamp is not None else time.time(),
                        fields=dict(key_values),
                    )
                )
        return self

    def set_baggage_item(self, key: str, value: str) -> MockSpan:
        with self._lock:
            if self._check_not_finished("set_baggage_item"):
                self._context = self._context.with_baggage_item(key, value)
        return self

    def get_baggage_item(self, key: str) -> str | None:
        return self._context.baggage.get(key)

    def finish(self, finish_time: float | None = None) -> None:
        with self._lock:
            if not self._check_not_finished("finish"):
                return
            self.finish_time = finish_time if finish_time is not None else time.time()
        self._tracer._span_finished(self)

    def to_record(self) -> SpanRecord:
        """Snapshot this span as a JSON-safe record."""
        with self._lock:
            return SpanRecord(
                trace_id=self._context.trace_id,
                span_id=self._context.span_id,
                parent_id=self.parent_id,
                operation_name=self.operation_name,
                start_time=float(self.start_time),
                finish_time=float(self.finish_time) if self.finish_time is not None else None,
                tags={key: _safe_value(value) for key, value in self.tags.items()},
                logs=[
                    LogRecord(
                        timestamp=log.timestamp,
                        fields={key: _safe_value(value) for key, value in log.fields.items()},
                    )
                    for log in self.logs
                ],
                baggage=dict(self._context.baggage),
                references=[
                    ReferenceRecord(
                        type=str(reference.type),
                        trace_id=reference.referenced_context.trace_id,
                        span_id=reference.referenced_context.span_id,
                    )
                    for reference in self.references
                    if isinstance(reference.referenced_context, MockSpanContext)
                ],
            )

    def _check_not_finished(self, action: str) -> bool:
        if self.finish_time is None:
            return True
        warnings.warn(
            f"spanscope: {action} called on already finished span '{self.operation_name}'",
            stacklevel=3,
        )
        return False

    def __repr__(self) -> str:
        return f"MockSpan({self.operation_name!r}, {self._context!r})"


def _safe_value(value: object) -> object:
    """Ensure a value is JSON-serializable; fall back to str representation."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return f"{value!r} [NON-SERIALIZABLE]"
