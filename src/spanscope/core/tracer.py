"""Tracer and SpanBuilder contracts."""

from __future__ import annotations

import abc
from collections.abc import Mapping
from enum import StrEnum
from typing import NamedTuple

from ..propagation import Format
from .scope import Scope, ScopeManager
from .span import Span, SpanContext


class ReferenceType(StrEnum):
    CHILD_OF = "child_of"
    FOLLOWS_FROM = "follows_from"


class Reference(NamedTuple):
    """A causal relationship from a span being built to another span's context."""

    type: ReferenceType
    referenced_context: SpanContext


def child_of(referenced_context: SpanContext) -> Reference:
    return Reference(ReferenceType.CHILD_OF, referenced_context)


def follows_from(referenced_context: SpanContext) -> Reference:
    return Reference(ReferenceType.FOLLOWS_FROM, referenced_context)


class SpanBuilder(abc.ABC):
    """Collects span options and starts the span.

    If the tracer has an active scope, no reference was added explicitly and
    ``ignore_active_span`` was not called, the started span becomes a child of
    the active span.
    """

    def __init__(self, tracer: Tracer, operation_name: str) -> None:
        self.tracer = tracer
        self.operation_name = operation_name
        self.references: list[Reference] = []
        self.tags: dict[str, object] = {}
        self.start_time: float | None = None
        self._ignore_active_span = False

    def as_child_of(self, parent: Span | SpanContext | None) -> SpanBuilder:
        if parent is None:
            return self
        context = parent.context if isinstance(parent, Span) else parent
        return self.add_reference(ReferenceType.CHILD_OF, context)

    def add_reference(
        self, reference_type: ReferenceType, referenced_context: SpanContext | None
    ) -> SpanBuilder:
        if referenced_context is not None:
            self.references.append(Reference(reference_type, referenced_context))
        return self

    def ignore_active_span(self) -> SpanBuilder:
        self._ignore_active_span = True
        return self

    def with_tag(self, key: str, value: object) -> SpanBuilder:
        self.tags[key] = value
        return self

    def with_start_timestamp(self, start_time: float) -> SpanBuilder:
        self.start_time = start_time
        return self

    def resolved_references(self) -> list[Reference]:
        """Explicit references, or an implicit ``child_of`` the active span."""
        if self.references or self._ignore_active_span:
            return list(self.references)
        active = self.tracer.active_span
        if active is None:
            return []
        return [child_of(active.context)]

    @abc.abstractmethod
    def start(self) -> Span:
        """Start the span without activating it."""

    def start_active(self, finish_on_close: bool) -> Scope:
        return self.tracer.scope_manager.activate(self.start(), finish_on_close)


class Tracer(abc.ABC):
    """Entry point for creating spans and propagating their context."""

    @property
    @abc.abstractmethod
    def scope_manager(self) -> ScopeManager: ...

    @property
    def active_span(self) -> Span | None:
        scope = self.scope_manager.active
        return scope.span if scope is not None else None

    @abc.abstractmethod
    def build_span(self, operation_name: str) -> SpanBuilder: ...

    @abc.abstractmethod
    def inject(self, span_context: SpanContext, format: Format, carrier: object) -> None:
        """Serialize ``span_context`` into a writable ``carrier`` of ``format``."""

    @abc.abstractmethod
    def extract(self, format: Format, carrier: object) -> SpanContext | None:
        """Read a span context from ``carrier``.

        Returns ``None`` when the carrier holds no propagated state and raises
        ``SpanContextCorruptedError`` when the state is present but malformed.
        """

    def start_span(
        self,
        operation_name: str,
        child_of: Span | SpanContext | None = None,
        references: list[Reference] | None = None,
        tags: Mapping[str, object] | None = None,
        start_time: float | None = None,
        ignore_active_span: bool = False,
    ) -> Span:
        return self._builder(
            operation_name, child_of, references, tags, start_time, ignore_active_span
        ).start()

    def start_active_span(
        self,
        operation_name: str,
        child_of: Span | SpanContext | None = None,
        references: list[Reference] | None = None,
        tags: Mapping[str, object] | None = None,
        start_time: float | None = None,
        ignore_active_span: bool = False,
        finish_on_close: bool = True,
    ) -> Scope:
        return self._builder(
            operation_name, child_of, references, tags, start_time, ignore_active_span
        ).start_active(finish_on_close)

    def _builder(
        self,
        operation_name: str,
        parent: Span | SpanContext | None,
        references: list[Reference] | None,
        tags: Mapping[str, object] | None,
        start_time: float | None,
        ignore_active_span: bool,
    ) -> SpanBuilder:
        builder = self.build_span(operation_name).as_child_of(parent)
        for reference in references or []:
            builder.add_reference(reference.type, reference.referenced_context)
        for key, value in (tags or {}).items():
            builder.with_tag(key, value)
        if start_time is not None:
            builder.with_start_timestamp(start_time)
        if ignore_active_span:
            builder.ignore_active_span()
        return builder
