"""Cross-process propagation: inject into headers on the client, extract on the server.

Validates: HTTP_HEADERS and BINARY carriers, baggage travelling with the
context, absence of state yielding ``None``, and per-process span exports
that ``spanscope show client.jsonl server.jsonl`` stitches into one trace.
"""

from __future__ import annotations

import sys
from pathlib import Path

from spanscope.mock import MockTracer, MockTracerConfig
from spanscope.propagation import Format, TextMapExtractAdapter, TextMapInjectAdapter
from spanscope.serializers import export_spans, load_spans


def main(output_dir: Path) -> None:
    client = MockTracer()
    server = MockTracer(config=MockTracerConfig(first_id=1000))

    with client.start_active_span("call_inventory") as scope:
        scope.span.set_baggage_item("tenant", "acme")
        headers: dict[str, str] = {"Accept": "application/json"}
        client.inject(scope.span.context, Format.HTTP_HEADERS, TextMapInjectAdapter(headers))

    incoming = server.extract(Format.HTTP_HEADERS, TextMapExtractAdapter(headers))
    with server.start_active_span("serve_inventory", child_of=incoming) as handler:
        assert handler.span.get_baggage_item("tenant") == "acme"

    buffer = bytearray()
    client.inject(scope.span.context, Format.BINARY, buffer)
    assert server.extract(Format.BINARY, bytes(buffer)) == scope.span.context

    assert server.extract(Format.TEXT_MAP, TextMapExtractAdapter({})) is None

    client_file = export_spans(client.records().spans, output_dir / "client.jsonl", append=False)
    server_file = export_spans(server.records().spans, output_dir / "server.jsonl", append=False)
    merged = load_spans(client_file, server_file)
    assert len(merged.trace_ids) == 1
    print(f"Cross-process propagation PASSED; exports in {output_dir}")


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else Path("spans"))
