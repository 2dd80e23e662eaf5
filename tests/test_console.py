from __future__ import annotations

from spanscope.models import LogRecord, ReferenceRecord, SpanCollection, SpanRecord
from spanscope.renderers import render_spans


def _collection() -> SpanCollection:
    root = SpanRecord(
        trace_id=1,
        span_id=1,
        operation_name="handle_request",
        start_time=0.0,
        finish_time=5.0,
        baggage={"tenant": "acme"},
    )
    child = SpanRecord(
        trace_id=1,
        span_id=2,
        parent_id=1,
        operation_name="fetch_user",
        start_time=1.0,
        finish_time=3.0,
        tags={"error": True, "db.type": "sql"},
        logs=[
            LogRecord(
                timestamp=2.0,
                fields={"event": "error", "error.kind": "TimeoutError", "message": "db slow"},
            )
        ],
    )
    other = SpanRecord(trace_id=9, span_id=9, operation_name="cron", start_time=0.0)
    return SpanCollection(name="api", spans=[child, root, other])


def test_render_minimal_contains_structure() -> None:
    output = render_spans(_collection(), verbosity="minimal")
    assert "Spans: api (3 spans, 2 traces)" in output
    assert "trace 1" in output
    assert "handle_request #1 (5000ms) ✓" in output
    assert "fetch_user #2 (2000ms) ✗" in output
    assert "cron #9 (unfinished) …" in output
    assert "error:" not in output


def test_render_standard_shows_errors_not_tags() -> None:
    output = render_spans(_collection(), verbosity="standard")
    assert "error: TimeoutError: db slow" in output
    assert "tags:" not in output


def test_render_full_shows_tags_baggage_and_logs() -> None:
    output = render_spans(_collection(), verbosity="full")
    assert 'tags: {"error": true, "db.type": "sql"}' in output
    assert 'baggage: {"tenant": "acme"}' in output
    assert 'log: {"event": "error"' in output


def test_child_renders_under_parent() -> None:
    output = render_spans(_collection(), verbosity="minimal")
    assert output.index("handle_request") < output.index("fetch_user") < output.index("trace 9")


def test_render_standard_shows_references_and_introduced_baggage() -> None:
    root = SpanRecord(
        trace_id=1,
        span_id=1,
        operation_name="publish",
        start_time=0.0,
        finish_time=1.0,
        baggage={"tenant": "acme"},
    )
    consumer = SpanRecord(
        trace_id=1,
        span_id=2,
        parent_id=1,
        operation_name="consume",
        start_time=2.0,
        finish_time=3.0,
        baggage={"tenant": "acme", "queue": "orders"},
        references=[
            ReferenceRecord(type="follows_from", trace_id=1, span_id=1),
            ReferenceRecord(type="follows_from", trace_id=7, span_id=70),
        ],
    )
    output = render_spans(SpanCollection(spans=[root, consumer]), verbosity="standard")

    assert 'baggage set: {"tenant": "acme"}' in output
    assert 'baggage set: {"queue": "orders"}' in output
    assert "follows_from #1" in output
    assert "follows_from #70 in trace 7" in output
    assert "follows_from" not in render_spans(
        SpanCollection(spans=[root, consumer]), verbosity="minimal"
    )
