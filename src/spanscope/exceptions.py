"""Public exception types for spanscope."""

from __future__ import annotations


class SpanscopeError(Exception):
    """Base class for all spanscope exceptions."""


class UnsupportedOperationError(SpanscopeError, NotImplementedError):
    """Raised when a carrier is used in a direction it does not support."""


class UnsupportedFormatError(SpanscopeError, ValueError):
    """Raised when a tracer does not know how to handle a carrier format."""


class InvalidCarrierError(SpanscopeError, TypeError):
    """Raised when a carrier does not have the shape its format requires."""


class SpanContextCorruptedError(SpanscopeError, ValueError):
    """Raised when propagated state is present in a carrier but malformed."""


class TracerAlreadyRegisteredError(SpanscopeError, RuntimeError):
    """Raised when a different global tracer has already been registered."""


class SpanscopeLoadError(SpanscopeError):
    """Raised when a finished-span file cannot be loaded or parsed."""
