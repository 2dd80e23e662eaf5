"""Process-wide tracer registry.

``get()`` returns a constant forwarding tracer. Every call on it is delegated,
at call time, to whichever tracer currently occupies the registry, so a
reference obtained before registration behaves exactly like one obtained
after. Until a tracer is registered the delegate is a ``NoopTracer``.

Registration happens at most once per process. Prefer passing a tracer
through explicit wiring; the registry is the fallback for code that cannot
receive one.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from .core.scope import ScopeManager
from .core.span import Span, SpanContext
from .core.tracer import SpanBuilder, Tracer
from .exceptions import TracerAlreadyRegisteredError
from .noop import NoopTracer
from .propagation import Format

_registration_lock = threading.Lock()
_tracer: Tracer = NoopTracer()


class GlobalTracer(Tracer):
    """Forwards every operation to the registered tracer."""

    @property
    def scope_manager(self) -> ScopeManager:
        return _tracer.scope_manager

    @property
    def active_span(self) -> Span | None:
        return _tracer.active_span

    def build_span(self, operation_name: str) -> SpanBuilder:
        return _tracer.build_span(operation_name)

    def inject(self, span_context: SpanContext, format: Format, carrier: object) -> None:
        _tracer.inject(span_context, format, carrier)

    def extract(self, format: Format, carrier: object) -> SpanContext | None:
        return _tracer.extract(format, carrier)

    def __repr__(self) -> str:
        return f"GlobalTracer({_tracer!r})"


_INSTANCE = GlobalTracer()


def get() -> Tracer:
    """Return the constant global tracer."""
    return _INSTANCE


def is_registered() -> bool:
    """Whether a tracer other than the no-op default has been registered.

    Useful when more than one component may be responsible for setting up
    tracing, e.g. an agent and the application itself.
    """
    return not isinstance(_tracer, NoopTracer)


def register_if_absent(provider: Callable[[], Tracer]) -> bool:
    """Register the tracer returned by ``provider`` unless one is registered.

    ``provider`` is only called when no tracer is registered yet. Returns
    ``True`` if this call installed the tracer. Concurrent callers are
    serialized; exactly one of them can win. Exceptions raised by
    ``provider`` propagate unchanged and nothing is installed.
    """
    global _tracer
    if provider is None:
        raise TypeError("Cannot register global tracer from provider <None>.")
    with _registration_lock:
        if is_registered():
            return False
        supplied = provider()
        if supplied is None:
            raise ValueError("Cannot register global tracer <None>.")
        if isinstance(supplied, GlobalTracer):
            return False
        _tracer = supplied
        return True


def register(tracer: Tracer) -> None:
    """Register ``tracer`` as the global tracer.

    Kept for compatibility; prefer ``register_if_absent``. Re-registering the
    same tracer is allowed, but a different tracer raises
    ``TracerAlreadyRegisteredError``.
    """
    if (
        not register_if_absent(lambda: tracer)
        and tracer != _tracer
        and not isinstance(tracer, GlobalTracer)
    ):
        raise TracerAlreadyRegisteredError("There is already a current global tracer registered.")


def _reset() -> None:
    """Restore the no-op default. Used by test fixtures."""
    global _tracer
    with _registration_lock:
        _tracer = NoopTracer()
