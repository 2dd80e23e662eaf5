"""Activation stack shared by the builtin scope managers."""

from __future__ import annotations

import abc

from ..core.scope import Scope, ScopeManager
from ..core.span import Span


class StackScopeManager(ScopeManager):
    """Scope manager whose active scope lives in one storage slot.

    Each scope remembers the scope that was active when it was created, so the
    chain of predecessors forms the activation stack. Subclasses only decide
    where the slot lives (thread-local storage, a context variable, ...).
    """

    def activate(self, span: Span, finish_on_close: bool) -> Scope:
        return StackScope(self, span, finish_on_close)

    @property
    def active(self) -> Scope | None:
        return self._get_active()

    @abc.abstractmethod
    def _get_active(self) -> StackScope | None: ...

    @abc.abstractmethod
    def _set_active(self, scope: StackScope | None) -> None: ...


class StackScope(Scope):
    """Scope that restores its predecessor when closed."""

    def __init__(self, manager: StackScopeManager, span: Span, finish_on_close: bool) -> None:
        super().__init__(manager, span)
        self._stack_manager = manager
        self.finish_on_close = finish_on_close
        self.to_restore = manager._get_active()
        manager._set_active(self)

    def close(self) -> None:
        if self._stack_manager._get_active() is not self:
            # Closed out of order or twice. Leave the stack alone.
            return
        try:
            if self.finish_on_close:
                self.span.finish()
        finally:
            self._stack_manager._set_active(self.to_restore)
