"""Scope and ScopeManager contracts."""

from __future__ import annotations

import abc
from types import TracebackType

from .span import Span, record_error


class Scope(abc.ABC):
    """Activation record that makes a span current for one thread of control.

    A scope is created by ``ScopeManager.activate`` and must be closed exactly
    once, in LIFO order with respect to other scopes on the same thread. Use it
    as a context manager to guarantee ``close`` runs on every exit path.
    Closing a scope more than once, or out of order, is undefined beyond the
    managers' guarantee that it never corrupts the activation stack.
    """

    def __init__(self, manager: ScopeManager, span: Span) -> None:
        self._manager = manager
        self._span = span

    @property
    def manager(self) -> ScopeManager:
        return self._manager

    @property
    def span(self) -> Span:
        return self._span

    @abc.abstractmethod
    def close(self) -> None: ...

    def __enter__(self) -> Scope:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        record_error(self._span, exc_type, exc)
        self.close()
        return False


class ScopeManager(abc.ABC):
    """Activates spans and exposes the currently active scope."""

    @abc.abstractmethod
    def activate(self, span: Span, finish_on_close: bool) -> Scope:
        """Make ``span`` the active span and return the scope controlling it.

        When ``finish_on_close`` is true, closing the returned scope also
        finishes ``span``. Neglecting to close the scope is a programming
        error.
        """

    @property
    @abc.abstractmethod
    def active(self) -> Scope | None:
        """The active scope for the current thread of control, or ``None``."""
