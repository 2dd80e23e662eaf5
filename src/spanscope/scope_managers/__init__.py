"""Builtin scope managers."""

from .base import StackScope, StackScopeManager
from .context_vars import ContextVarsScopeManager, propagate_context
from .thread_local import ThreadLocalScopeManager

__all__ = [
    "ContextVarsScopeManager",
    "StackScope",
    "StackScopeManager",
    "ThreadLocalScopeManager",
    "propagate_context",
]
