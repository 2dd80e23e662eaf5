"""Scope manager backed by thread-local storage."""

from __future__ import annotations

import threading

from .base import StackScope, StackScopeManager


class ThreadLocalScopeManager(StackScopeManager):
    """Keeps one activation stack per thread.

    A newly started thread sees no active scope. Handing an active span to a
    worker thread means re-activating it there explicitly.
    """

    def __init__(self) -> None:
        self._tls = threading.local()

    def _get_active(self) -> StackScope | None:
        return getattr(self._tls, "active", None)

    def _set_active(self, scope: StackScope | None) -> None:
        self._tls.active = scope
