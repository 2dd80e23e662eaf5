"""Serialization helpers."""

from .jsonl import dump_span_lines, export_spans, load_spans, parse_span_lines

__all__ = ["dump_span_lines", "export_spans", "load_spans", "parse_span_lines"]
