"""Span and SpanContext capability contracts."""

from __future__ import annotations

import abc
from collections.abc import Iterator, Mapping
from types import TracebackType
from typing import TYPE_CHECKING

from .. import log_fields, tags

if TYPE_CHECKING:
    from .tracer import Tracer


class SpanContext(abc.ABC):
    """Propagable state of a span: trace identity plus baggage.

    Instances are immutable from the point of view of the caller; setting
    baggage on a span replaces the span's context rather than mutating it.
    """

    @property
    @abc.abstractmethod
    def baggage(self) -> Mapping[str, str]: ...

    def baggage_items(self) -> Iterator[tuple[str, str]]:
        return iter(self.baggage.items())


class Span(abc.ABC):
    """A single timed unit of work.

    Used as a context manager the span is finished on exit. If the block
    raised, the error is tagged and logged on the span first; the exception
    is never suppressed.
    """

    @property
    @abc.abstractmethod
    def context(self) -> SpanContext: ...

    @property
    @abc.abstractmethod
    def tracer(self) -> Tracer: ...

    @abc.abstractmethod
    def set_operation_name(self, operation_name: str) -> Span: ...

    @abc.abstractmethod
    def set_tag(self, key: str, value: object) -> Span: ...

    @abc.abstractmethod
    def log_kv(self, key_values: Mapping[str, object], timestamp: float | None = None) -> Span: ...

    @abc.abstractmethod
    def set_baggage_item(self, key: str, value: str) -> Span: ...

    @abc.abstractmethod
    def get_baggage_item(self, key: str) -> str | None: ...

    @abc.abstractmethod
    def finish(self, finish_time: float | None = None) -> None: ...

    def log_event(self, event: str, payload: object | None = None) -> Span:
        fields: dict[str, object] = {log_fields.EVENT: event}
        if payload is not None:
            fields["payload"] = payload
        return self.log_kv(fields)

    def __enter__(self) -> Span:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        record_error(self, exc_type, exc)
        self.finish()
        return False


def record_error(
    span: Span,
    exc_type: type[BaseException] | None,
    exc: BaseException | None,
) -> None:
    """Tag ``span`` as failed and log the exception details, if any."""
    if exc is None or exc_type is None:
        return
    tags.ERROR.set(span, True)
    span.log_kv(
        {
            log_fields.EVENT: tags.ERROR.key,
            log_fields.ERROR_KIND: exc_type.__name__,
            log_fields.ERROR_OBJECT: exc,
            log_fields.MESSAGE: str(exc),
        }
    )
