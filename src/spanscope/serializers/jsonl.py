"""JSON Lines export of finished spans.

Every line holds one span, so a process can append to its export file as
spans finish and files written by cooperating processes can be merged into
one collection. Traces that crossed a process boundary are stitched back
together by their shared trace id.
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import SpanscopeLoadError
from ..models import CURRENT_SCHEMA_VERSION, SpanCollection, SpanRecord


class _SpanLine(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    schema_version: str
    span: SpanRecord


def dump_span_lines(records: Iterable[SpanRecord]) -> str:
    return "".join(
        _SpanLine(schema_version=CURRENT_SCHEMA_VERSION, span=record).model_dump_json() + "\n"
        for record in records
    )


def parse_span_lines(payload: str, *, source: str = "<string>") -> list[SpanRecord]:
    """Parse JSON Lines text into span records.

    Blank lines are skipped. Raises ``SpanscopeLoadError`` naming the first
    bad line. Warns once per source if any line was written with a different
    schema version.
    """
    records: list[SpanRecord] = []
    foreign_versions: set[str] = set()
    for lineno, line in enumerate(payload.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            parsed = _SpanLine.model_validate_json(line)
        except (ValidationError, ValueError) as exc:
            raise SpanscopeLoadError(f"Failed to parse span line {source}:{lineno}: {exc}") from exc
        if parsed.schema_version != CURRENT_SCHEMA_VERSION:
            foreign_versions.add(parsed.schema_version)
        records.append(parsed.span)
    if foreign_versions:
        warnings.warn(
            f"spanscope: {source} holds schema versions {sorted(foreign_versions)} that differ "
            f"from current {CURRENT_SCHEMA_VERSION!r}. Some fields may be missing or ignored.",
            stacklevel=2,
        )
    return records


def export_spans(
    records: Iterable[SpanRecord], path: str | Path, *, append: bool = True
) -> Path:
    """Write ``records`` to ``path``, appending to an existing export by default."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("a" if append else "w", encoding="utf-8") as handle:
        handle.write(dump_span_lines(records))
    return output_path


def load_spans(*paths: str | Path, name: str = "") -> SpanCollection:
    """Merge the span exports at ``paths`` into one collection.

    Raises ``SpanscopeLoadError`` on invalid content,
    or ``FileNotFoundError`` / ``OSError`` if a file is inaccessible.
    """
    spans: list[SpanRecord] = []
    for path in paths:
        payload = Path(path).read_text(encoding="utf-8")
        spans.extend(parse_span_lines(payload, source=str(path)))
    return SpanCollection(name=name, spans=spans)
