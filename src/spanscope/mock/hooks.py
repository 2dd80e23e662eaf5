"""Event hook protocol for observing mock spans as they start and finish."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .span import MockSpan


@runtime_checkable
class SpanHook(Protocol):
    """Protocol for receiving span lifecycle events.

    Hook methods must not raise; exceptions are turned into warnings by the
    tracer.
    """

    def on_span_started(self, span: MockSpan) -> None: ...
    def on_span_finished(self, span: MockSpan) -> None: ...


class NullHook:
    """No-op hook."""

    def on_span_started(self, span: MockSpan) -> None:
        pass

    def on_span_finished(self, span: MockSpan) -> None:
        pass
