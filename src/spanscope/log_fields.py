"""Standard log field keys for ``Span.log_kv``."""

from __future__ import annotations

ERROR_KIND = "error.kind"
"""Type or kind of an error, e.g. ``"ValueError"``."""

ERROR_OBJECT = "error.object"
"""The actual exception instance."""

EVENT = "event"
"""A stable identifier for some notable moment in the lifetime of a span."""

MESSAGE = "message"
"""A concise, human-readable, one-line message explaining the event."""

STACK = "stack"
"""A stack trace in platform-conventional format."""
