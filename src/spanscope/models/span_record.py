"""Snapshot models for finished spans."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, computed_field

CURRENT_SCHEMA_VERSION = "0.1.0"


class LogRecord(BaseModel):
    """One structured log entry on a span."""

    model_config = ConfigDict(strict=True, extra="ignore")

    timestamp: float
    fields: dict[str, object] = Field(default_factory=dict)


class ReferenceRecord(BaseModel):
    """A reference from a span to another span's context."""

    model_config = ConfigDict(strict=True, extra="ignore")

    type: str
    trace_id: int
    span_id: int


class SpanRecord(BaseModel):
    """Immutable-by-convention copy of a span's state when it finished."""

    model_config = ConfigDict(strict=True, extra="ignore")

    trace_id: int
    span_id: int
    parent_id: int | None = None
    operation_name: str
    start_time: float
    finish_time: float | None = None
    tags: dict[str, object] = Field(default_factory=dict)
    logs: list[LogRecord] = Field(default_factory=list)
    baggage: dict[str, str] = Field(default_factory=dict)
    references: list[ReferenceRecord] = Field(default_factory=list)

    @computed_field(return_type=float | None)
    @property
    def duration_ms(self) -> float | None:
        if self.finish_time is None:
            return None
        return (self.finish_time - self.start_time) * 1000.0

    @property
    def failed(self) -> bool:
        return self.tags.get("error") is True


class SpanCollection(BaseModel):
    """Root container written to and read from finished-span files."""

    model_config = ConfigDict(strict=True, extra="ignore")

    schema_version: str = CURRENT_SCHEMA_VERSION
    name: str = ""
    spans: list[SpanRecord] = Field(default_factory=list)

    @property
    def root_spans(self) -> list[SpanRecord]:
        known = {span.span_id for span in self.spans}
        return [span for span in self.spans if span.parent_id not in known]

    @property
    def trace_ids(self) -> list[int]:
        return sorted({span.trace_id for span in self.spans})

    def traces(self) -> dict[int, list[SpanRecord]]:
        """Group spans by trace id, each trace ordered by start time."""
        grouped: dict[int, list[SpanRecord]] = {}
        for span in sorted(self.spans, key=lambda span: (span.start_time, span.span_id)):
            grouped.setdefault(span.trace_id, []).append(span)
        return dict(sorted(grouped.items()))

    def select(self, trace_ids: Iterable[int]) -> SpanCollection:
        """Return a collection holding only the spans of ``trace_ids``."""
        wanted = set(trace_ids)
        return SpanCollection(
            schema_version=self.schema_version,
            name=self.name,
            spans=[span for span in self.spans if span.trace_id in wanted],
        )
