"""Rich-based console rendering of finished spans."""

from __future__ import annotations

import json
from collections import defaultdict
from io import StringIO
from typing import Literal

from rich.console import Console
from rich.tree import Tree

from .. import log_fields
from ..models import SpanCollection, SpanRecord

Verbosity = Literal["minimal", "standard", "full"]
_MAX_VALUE_LEN = 200


def render_spans(collection: SpanCollection, *, verbosity: Verbosity = "standard") -> str:
    """Render one tree per trace, children ordered by start time.

    From ``standard`` verbosity on, each span also lists its errors, the
    references other than the one to its tree parent, and the baggage it
    introduced or changed relative to that parent.
    """
    tree = Tree(_collection_label(collection))
    known = {span.span_id for span in collection.spans}
    children_by_parent: dict[int | None, list[SpanRecord]] = defaultdict(list)
    for span in collection.spans:
        parent = span.parent_id if span.parent_id in known else None
        children_by_parent[parent].append(span)

    for siblings in children_by_parent.values():
        siblings.sort(key=lambda span: (span.start_time, span.span_id))

    roots_by_trace: dict[int, list[SpanRecord]] = defaultdict(list)
    for root in children_by_parent[None]:
        roots_by_trace[root.trace_id].append(root)

    for trace_id in sorted(roots_by_trace):
        trace_branch = tree.add(f"trace {trace_id}")
        for root in roots_by_trace[trace_id]:
            _add_span_branch(trace_branch, root, children_by_parent, verbosity, {})

    console = Console(record=True, width=120, markup=False, file=StringIO())
    console.print(tree)
    return console.export_text()


def _collection_label(collection: SpanCollection) -> str:
    name = collection.name or "<unnamed>"
    return f"Spans: {name} ({len(collection.spans)} spans, {len(collection.trace_ids)} traces)"


def _add_span_branch(
    parent_tree: Tree,
    span: SpanRecord,
    children_by_parent: dict[int | None, list[SpanRecord]],
    verbosity: Verbosity,
    inherited: dict[str, str],
) -> None:
    icon = "✗" if span.failed else ("✓" if span.finish_time is not None else "…")
    duration = f"{span.duration_ms:.0f}ms" if span.duration_ms is not None else "unfinished"
    branch = parent_tree.add(f"{span.operation_name} #{span.span_id} ({duration}) {icon}")

    if verbosity in ("standard", "full"):
        for log in span.logs:
            if log.fields.get(log_fields.EVENT) == "error":
                kind = log.fields.get(log_fields.ERROR_KIND)
                prefix = f"{kind}: " if kind else ""
                branch.add(f"error: {prefix}{log.fields.get(log_fields.MESSAGE, '')}")
        for reference in span.references:
            if reference.type == "child_of" and reference.span_id == span.parent_id:
                continue
            where = "" if reference.trace_id == span.trace_id else f" in trace {reference.trace_id}"
            branch.add(f"{reference.type} #{reference.span_id}{where}")
        introduced = {
            key: value for key, value in span.baggage.items() if inherited.get(key) != value
        }
        if introduced:
            branch.add(f"baggage set: {_format_data(dict(introduced))}")

    if verbosity == "full":
        if span.tags:
            branch.add(f"tags: {_format_data(span.tags)}")
        if span.baggage:
            branch.add(f"baggage: {_format_data(dict(span.baggage))}")
        for log in span.logs:
            branch.add(f"log: {_format_data(log.fields)}")

    for child in children_by_parent.get(span.span_id, []):
        _add_span_branch(branch, child, children_by_parent, verbosity, span.baggage)


def _format_data(data: dict[str, object]) -> str:
    """Format dict for display, truncating large values."""
    try:
        s = json.dumps(data, ensure_ascii=False)
    except (TypeError, ValueError):
        s = str(data)
    if len(s) <= _MAX_VALUE_LEN:
        return s
    return s[:_MAX_VALUE_LEN] + "... [truncated]"
