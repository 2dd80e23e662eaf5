from __future__ import annotations

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from spanscope import log_fields
from spanscope.core import Scope
from spanscope.mock import MockSpan, MockTracer
from spanscope.scope_managers import ContextVarsScopeManager, propagate_context


def test_nested_activation_scenario(tracer: MockTracer) -> None:
    manager = tracer.scope_manager
    span_a = tracer.build_span("a").start()
    span_b = tracer.build_span("b").start()

    scope_a = manager.activate(span_a, True)
    scope_b = manager.activate(span_b, False)
    assert manager.active is scope_b
    assert manager.active.span is span_b

    scope_b.close()
    assert manager.active is scope_a
    assert manager.active.span is span_a
    assert not span_b.finished

    scope_a.close()
    assert manager.active is None
    assert span_a.finished
    assert tracer.finished_spans() == [span_a]


def test_lifo_sequence_restores_previous_active(tracer: MockTracer) -> None:
    manager = tracer.scope_manager
    outer = manager.activate(tracer.build_span("outer").start(), True)

    scopes: list[Scope] = []
    for depth in range(10):
        scopes.append(manager.activate(tracer.build_span(f"level_{depth}").start(), True))
        assert manager.active is scopes[-1]

    while scopes:
        scopes.pop().close()
        expected = scopes[-1] if scopes else outer
        assert manager.active is expected

    outer.close()
    assert manager.active is None
    assert len(tracer.finished_spans()) == 11


def test_close_out_of_order_is_a_silent_noop(tracer: MockTracer) -> None:
    manager = tracer.scope_manager
    span_a = tracer.build_span("a").start()
    span_b = tracer.build_span("b").start()
    scope_a = manager.activate(span_a, True)
    scope_b = manager.activate(span_b, True)

    scope_a.close()
    assert manager.active is scope_b
    assert not span_a.finished

    scope_b.close()
    assert manager.active is scope_a
    scope_a.close()
    assert manager.active is None
    assert span_a.finished


def test_double_close_does_not_corrupt_stack(tracer: MockTracer) -> None:
    manager = tracer.scope_manager
    outer = manager.activate(tracer.build_span("outer").start(), False)
    inner = manager.activate(tracer.build_span("inner").start(), True)

    inner.close()
    inner.close()
    assert manager.active is outer
    assert len(tracer.finished_spans()) == 1
    outer.close()


def test_finish_on_close_false_never_finishes(tracer: MockTracer) -> None:
    span = tracer.build_span("manual").start()
    with tracer.scope_manager.activate(span, False):
        pass
    assert not span.finished
    span.finish()
    assert tracer.finished_spans() == [span]


def test_scope_context_manager_closes_on_exception(tracer: MockTracer) -> None:
    with pytest.raises(RuntimeError, match="boom"), tracer.start_active_span("failing"):
        raise RuntimeError("boom")

    assert tracer.scope_manager.active is None
    (span,) = tracer.finished_spans()
    assert span.tags["error"] is True
    assert span.logs[0].fields[log_fields.ERROR_KIND] == "RuntimeError"
    assert span.logs[0].fields[log_fields.MESSAGE] == "boom"


def test_activate_does_not_validate_span(tracer: MockTracer) -> None:
    scope = tracer.scope_manager.activate(None, False)  # type: ignore[arg-type]
    assert tracer.scope_manager.active is scope
    scope.close()
    assert tracer.scope_manager.active is None


def test_new_thread_starts_with_empty_stack(tracer: MockTracer) -> None:
    seen: list[object] = []

    with tracer.start_active_span("main_thread"):

        def worker() -> None:
            seen.append(tracer.scope_manager.active)

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

    assert seen == [None]


def test_threads_keep_independent_stacks(tracer: MockTracer) -> None:
    barrier = threading.Barrier(4)
    results: dict[str, bool] = {}

    def worker(name: str) -> None:
        with tracer.start_active_span(name) as scope:
            barrier.wait()
            results[name] = tracer.active_span is scope.span
        results[f"{name}_after"] = tracer.scope_manager.active is None

    threads = [threading.Thread(target=worker, args=(f"t{i}",)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert all(results.values())
    assert len(results) == 8


def test_propagate_context_hands_active_scope_to_worker() -> None:
    tracer = MockTracer(scope_manager=ContextVarsScopeManager())

    with tracer.start_active_span("submitter") as scope:

        def work() -> MockSpan | None:
            with tracer.start_active_span("child") as child:
                assert isinstance(child.span, MockSpan)
                return child.span

        with ThreadPoolExecutor(max_workers=1) as pool:
            child_span = pool.submit(propagate_context(work)).result()

        assert tracer.scope_manager.active is scope

    assert child_span is not None
    assert child_span.parent_id == scope.span.context.span_id


@pytest.mark.asyncio
async def test_contextvars_tasks_do_not_leak_activations() -> None:
    tracer = MockTracer(scope_manager=ContextVarsScopeManager())

    with tracer.start_active_span("root") as root:

        async def branch(name: str) -> int | None:
            with tracer.start_active_span(name) as scope:
                await asyncio.sleep(0)
                assert tracer.scope_manager.active is scope
                return scope.span.parent_id  # type: ignore[attr-defined]

        parents = await asyncio.gather(branch("b1"), branch("b2"), branch("b3"))
        assert tracer.scope_manager.active is root

    assert parents == [root.span.context.span_id] * 3
    assert len(tracer.finished_spans()) == 4


def test_propagate_context_wrapper_runs_concurrently() -> None:
    tracer = MockTracer(scope_manager=ContextVarsScopeManager())
    barrier = threading.Barrier(2)

    with tracer.start_active_span("submitter") as scope:

        def work(name: str) -> int | None:
            with tracer.start_active_span(name) as child:
                barrier.wait(timeout=5)
                assert tracer.scope_manager.active is child
                return child.span.parent_id  # type: ignore[attr-defined]

        wrapped = propagate_context(work)
        with ThreadPoolExecutor(max_workers=2) as pool:
            parents = list(pool.map(wrapped, ["w1", "w2"]))

    assert parents == [scope.span.context.span_id] * 2


def test_propagate_context_calls_do_not_see_each_others_activations() -> None:
    tracer = MockTracer(scope_manager=ContextVarsScopeManager())

    with tracer.start_active_span("submitter") as scope:

        def leave_scope_open() -> Scope | None:
            seen = tracer.scope_manager.active
            tracer.scope_manager.activate(tracer.build_span("left_open").start(), False)
            return seen

        wrapped = propagate_context(leave_scope_open)
        with ThreadPoolExecutor(max_workers=1) as pool:
            first = pool.submit(wrapped).result()
            second = pool.submit(wrapped).result()

    assert first is scope
    assert second is scope


def test_close_restores_predecessor_when_finish_raises(
    tracer: MockTracer, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = tracer.scope_manager
    outer = manager.activate(tracer.build_span("outer").start(), False)
    span = tracer.build_span("broken").start()

    def failing_finish(finish_time: float | None = None) -> None:
        raise RuntimeError("exporter down")

    monkeypatch.setattr(span, "finish", failing_finish)
    inner = manager.activate(span, True)

    with pytest.raises(RuntimeError, match="exporter down"):
        inner.close()

    assert manager.active is outer
    outer.close()
    assert manager.active is None
