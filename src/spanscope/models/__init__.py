"""Data models for finished-span snapshots."""

from .span_record import (
    CURRENT_SCHEMA_VERSION,
    LogRecord,
    ReferenceRecord,
    SpanCollection,
    SpanRecord,
)

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "LogRecord",
    "ReferenceRecord",
    "SpanCollection",
    "SpanRecord",
]
