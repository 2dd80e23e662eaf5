"""Implementations of the ``traces`` and ``show`` subcommands."""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from pathlib import Path

from ..exceptions import SpanscopeLoadError
from ..models import SpanCollection, SpanRecord
from ..renderers import Verbosity, render_spans
from ..serializers import load_spans


def run_traces(span_files: Sequence[Path], *, as_json: bool) -> int:
    collection = _load(span_files)
    if collection is None:
        return 1
    summaries = [_summarize(trace_id, spans) for trace_id, spans in collection.traces().items()]

    if as_json:
        print(json.dumps(summaries, ensure_ascii=True, sort_keys=True))
        return 0

    print(f"Traces: {len(summaries)}  Spans: {len(collection.spans)}")
    for summary in summaries:
        duration = summary["duration_ms"]
        shown = f"{duration:.0f}ms" if isinstance(duration, float) else "unfinished"
        print(
            f"  trace {summary['trace_id']}: {summary['root_operation']} "
            f"({summary['span_count']} spans, {summary['failed_count']} failed, {shown})"
        )
    return 0


def run_show(
    span_files: Sequence[Path],
    verbosity: Verbosity,
    *,
    trace_id: int | None,
    operation: str | None,
    failed_only: bool,
) -> int:
    collection = _load(span_files)
    if collection is None:
        return 1

    selected = [
        tid
        for tid, spans in collection.traces().items()
        if (trace_id is None or tid == trace_id)
        and (operation is None or any(span.operation_name == operation for span in spans))
        and (not failed_only or any(span.failed for span in spans))
    ]
    if not selected:
        print("No matching traces.", file=sys.stderr)
        return 1

    print(render_spans(collection.select(selected), verbosity=verbosity))
    return 0


def _load(span_files: Sequence[Path]) -> SpanCollection | None:
    name = ", ".join(path.name for path in span_files)
    try:
        return load_spans(*span_files, name=name)
    except FileNotFoundError as exc:
        print(f"Error: file not found: {exc.filename}", file=sys.stderr)
    except SpanscopeLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    except OSError as exc:
        print(f"Error reading file: {exc}", file=sys.stderr)
    return None


def _summarize(trace_id: int, spans: list[SpanRecord]) -> dict[str, object]:
    known = {span.span_id for span in spans}
    roots = [span for span in spans if span.parent_id not in known]
    finish_times = [span.finish_time for span in spans if span.finish_time is not None]
    duration: float | None = None
    if len(finish_times) == len(spans):
        duration = (max(finish_times) - min(span.start_time for span in spans)) * 1000.0

    return {
        "trace_id": trace_id,
        "root_operation": roots[0].operation_name if roots else None,
        "span_count": len(spans),
        "failed_count": sum(1 for span in spans if span.failed),
        "operations": sorted({span.operation_name for span in spans}),
        "duration_ms": duration,
    }
