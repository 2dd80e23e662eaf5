"""Text-map carrier protocol and adapters."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Protocol, runtime_checkable

from ..exceptions import UnsupportedOperationError


@runtime_checkable
class TextMap(Protocol):
    """A string-to-string carrier for ``TEXT_MAP`` and ``HTTP_HEADERS``.

    Iteration yields ``(key, value)`` pairs; ``put`` writes one entry.
    """

    def __iter__(self) -> Iterator[tuple[str, str]]: ...
    def put(self, key: str, value: str) -> None: ...


class TextMapExtractAdapter:
    """Read-only view of a mapping, usable only with ``Tracer.extract``."""

    def __init__(self, entries: Mapping[str, str]) -> None:
        self._entries = entries

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._entries.items())

    def put(self, key: str, value: str) -> None:
        raise UnsupportedOperationError(
            "TextMapExtractAdapter should only be used with Tracer.extract()"
        )

    def __repr__(self) -> str:
        return f"TextMapExtractAdapter({dict(self._entries)!r})"


class TextMapInjectAdapter:
    """Write-only view of a mutable mapping, usable only with ``Tracer.inject``."""

    def __init__(self, entries: MutableMapping[str, str]) -> None:
        self._entries = entries

    def __iter__(self) -> Iterator[tuple[str, str]]:
        raise UnsupportedOperationError(
            "TextMapInjectAdapter should only be used with Tracer.inject()"
        )

    def put(self, key: str, value: str) -> None:
        self._entries[key] = value
