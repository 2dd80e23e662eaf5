"""Scope manager backed by ``contextvars`` for threads and asyncio tasks."""

from __future__ import annotations

import contextvars
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from .base import StackScope, StackScopeManager

P = ParamSpec("P")
R = TypeVar("R")


class ContextVarsScopeManager(StackScopeManager):
    """Keeps one activation stack per execution context.

    Every thread and every asyncio task has its own stack. A task starts with
    the active scope of the code that created it; activations inside the task
    never leak back to its creator.
    """

    def __init__(self) -> None:
        self._active: contextvars.ContextVar[StackScope | None] = contextvars.ContextVar(
            f"spanscope_active_scope_{id(self):x}",
            default=None,
        )

    def _get_active(self) -> StackScope | None:
        return self._active.get()

    def _set_active(self, scope: StackScope | None) -> None:
        self._active.set(scope)


def propagate_context(func: Callable[P, R]) -> Callable[P, R]:
    """Copy the caller's contextvars to a callable for thread execution.

    Useful with ``ContextVarsScopeManager`` to let work submitted to a thread
    pool see the submitter's active scope. Each call runs in its own copy of
    the snapshot, so the wrapper may run concurrently and activations left by
    one call are never seen by the next.
    """
    copied_context = contextvars.copy_context()

    def wrapped(*args: P.args, **kwargs: P.kwargs) -> R:
        return copied_context.copy().run(func, *args, **kwargs)

    return wrapped
