"""Standard span tag keys and typed helpers for setting them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from .core.span import Span

V = TypeVar("V")

SPAN_KIND_SERVER = "server"
SPAN_KIND_CLIENT = "client"
SPAN_KIND_PRODUCER = "producer"
SPAN_KIND_CONSUMER = "consumer"


class Tag(Generic[V]):
    """A tag key bound to the type of value it carries."""

    def __init__(self, key: str) -> None:
        self.key = key

    def set(self, span: Span, value: V) -> Span:
        return span.set_tag(self.key, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"


class StringTag(Tag[str]):
    pass


class BooleanTag(Tag[bool]):
    pass


class IntTag(Tag[int]):
    pass


HTTP_URL = StringTag("http.url")
HTTP_STATUS = IntTag("http.status_code")
HTTP_METHOD = StringTag("http.method")

PEER_HOST_IPV4 = StringTag("peer.ipv4")
PEER_HOST_IPV6 = StringTag("peer.ipv6")
PEER_SERVICE = StringTag("peer.service")
PEER_HOSTNAME = StringTag("peer.hostname")
PEER_PORT = IntTag("peer.port")

SAMPLING_PRIORITY = IntTag("sampling.priority")
SPAN_KIND = StringTag("span.kind")
COMPONENT = StringTag("component")
ERROR = BooleanTag("error")

DB_TYPE = StringTag("db.type")
DB_INSTANCE = StringTag("db.instance")
DB_USER = StringTag("db.user")
DB_STATEMENT = StringTag("db.statement")

MESSAGE_BUS_DESTINATION = StringTag("message_bus.destination")
