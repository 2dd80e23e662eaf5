"""Basic usage: register a tracer once, then trace nested work through the global tracer."""

from __future__ import annotations

import spanscope
from spanscope.mock import MockTracer


def load_profile(user_id: str) -> dict[str, str]:
    tracer = spanscope.global_tracer()
    with tracer.start_active_span("load_profile") as scope:
        scope.span.set_tag("user.id", user_id)
        return {"id": user_id, "name": "Ada"}


def handle_request(user_id: str) -> str:
    tracer = spanscope.global_tracer()
    with tracer.start_active_span("handle_request"):
        profile = load_profile(user_id)
        return f"hello {profile['name']}"


def main() -> None:
    mock = MockTracer()
    spanscope.register_global_tracer_if_absent(lambda: mock)

    print(handle_request("u-1"))

    inner, outer = mock.finished_spans()
    assert inner.parent_id == outer.context.span_id
    print(f"Recorded {len(mock.finished_spans())} spans in trace {outer.context.trace_id}")


if __name__ == "__main__":
    main()
