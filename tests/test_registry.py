from __future__ import annotations

import threading

import pytest

import spanscope
from spanscope import registry
from spanscope.exceptions import TracerAlreadyRegisteredError
from spanscope.mock import MockTracer
from spanscope.noop import NoopSpan, NoopTracer
from spanscope.propagation import Format, TextMapExtractAdapter


def test_default_is_unregistered_noop() -> None:
    tracer = registry.get()

    assert not registry.is_registered()
    incoming = TextMapExtractAdapter({"ot-tracer-traceid": "1", "ot-tracer-spanid": "2"})
    assert tracer.extract(Format.TEXT_MAP, incoming) is None
    assert tracer.extract(Format.BINARY, bytearray(b"\x00\x01")) is None

    span = tracer.build_span("noop").with_tag("k", "v").start()
    assert isinstance(span, NoopSpan)
    span.set_baggage_item("user", "alice")
    assert span.get_baggage_item("user") is None
    span.finish()

    carrier: dict[str, str] = {}
    tracer.inject(span.context, Format.TEXT_MAP, spanscope.TextMapInjectAdapter(carrier))
    assert carrier == {}

    with tracer.build_span("noop_active").start_active(True) as scope:
        assert scope.span is span
        assert tracer.active_span is span


def test_get_returns_constant_forwarding_tracer() -> None:
    early = registry.get()
    mock = MockTracer()

    assert registry.register_if_absent(lambda: mock)
    assert registry.get() is early
    assert spanscope.global_tracer() is early

    with early.start_active_span("forwarded"):
        assert mock.active_span is early.active_span
    assert [span.operation_name for span in mock.finished_spans()] == ["forwarded"]
    assert repr(early).startswith("GlobalTracer(")


def test_register_if_absent_is_one_time() -> None:
    first = MockTracer()
    calls: list[str] = []

    def second_provider() -> MockTracer:
        calls.append("called")
        return MockTracer()

    assert registry.register_if_absent(lambda: first)
    assert registry.is_registered()
    assert not registry.register_if_absent(second_provider)
    assert calls == []
    assert registry.get().scope_manager is first.scope_manager


def test_register_if_absent_propagates_provider_errors() -> None:
    def failing_provider() -> MockTracer:
        raise RuntimeError("no backend")

    with pytest.raises(RuntimeError, match="no backend"):
        registry.register_if_absent(failing_provider)
    assert not registry.is_registered()


def test_register_if_absent_rejects_none() -> None:
    with pytest.raises(TypeError):
        registry.register_if_absent(None)  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="<None>"):
        registry.register_if_absent(lambda: None)  # type: ignore[arg-type,return-value]
    assert not registry.is_registered()


def test_register_if_absent_ignores_the_global_tracer_itself() -> None:
    assert not registry.register_if_absent(registry.get)
    assert not registry.is_registered()


def test_registering_a_noop_tracer_keeps_registry_open() -> None:
    assert registry.register_if_absent(NoopTracer)
    assert not registry.is_registered()
    assert registry.register_if_absent(MockTracer)


def test_register_compatibility_entry_point() -> None:
    tracer = MockTracer()
    registry.register(tracer)
    registry.register(tracer)
    registry.register(registry.get())

    with pytest.raises(TracerAlreadyRegisteredError, match="already"):
        registry.register(MockTracer())


def test_concurrent_registration_has_exactly_one_winner() -> None:
    callers = 16
    barrier = threading.Barrier(callers)
    results: list[bool] = []
    results_lock = threading.Lock()

    def attempt() -> None:
        barrier.wait()
        won = registry.register_if_absent(MockTracer)
        with results_lock:
            results.append(won)

    threads = [threading.Thread(target=attempt) for _ in range(callers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1
    assert results.count(False) == callers - 1
    assert registry.is_registered()


def test_package_level_aliases() -> None:
    assert not spanscope.is_global_tracer_registered()
    assert spanscope.register_global_tracer_if_absent(MockTracer)
    assert spanscope.is_global_tracer_registered()
    with pytest.raises(TracerAlreadyRegisteredError):
        spanscope.register_global_tracer(MockTracer())
