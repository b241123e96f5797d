"""
=============================================================================
HTTP HEADERS
=============================================================================

Protocol constants and the header container used by ParsedRequest.

=============================================================================
HEADER LINE FORMAT
=============================================================================

    Host: example.com\r\n
    ─┬──  ──────┬────
     │          │
    Name      Value
         ▲
         └── separator is exactly ": " (colon + single space)

Headers keep their original order and duplicates are allowed:

    Accept: text/html
    Accept: application/json    → two entries, both kept

=============================================================================
CASE SENSITIVITY
=============================================================================

RFC 7230 says header names are case-insensitive. This collection looks
names up case-sensitively ("Host" and "host" are different entries), so
a request must send "Host", not "host", to pass validation. This is a
known limitation of the format we are compatible with.

=============================================================================
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from multidict import MultiDict, MultiDictProxy


# =============================================================================
# PROTOCOL CONSTANTS
# =============================================================================

CRLF = "\r\n"
HTTP_1_1 = "HTTP/1.1"

HOST = "Host"
COOKIE = "Cookie"

HEADER_SEPARATOR = ": "


@dataclass(frozen=True)
class HTTPHeader:
    """A single header line."""

    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.name}{HEADER_SEPARATOR}{self.value}"


class HeaderCollection:
    """
    Ordered, read-only collection of request headers.

    Backed by a MultiDict so repeated names are preserved in arrival
    order. Only a MultiDictProxy is kept, so nothing handed out by this
    class can be used to change the parsed headers.

    Example:
        headers = HeaderCollection([("Host", "example.com")])
        headers.get("Host")        # "example.com"
        "Cookie" in headers        # False
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Tuple[str, str]] = ()):
        self._items: MultiDictProxy = MultiDictProxy(MultiDict(list(items)))

    def contains(self, name: str) -> bool:
        """Check whether at least one header with this exact name exists."""
        return name in self._items

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value for `name`, or `default`."""
        return self._items.get(name, default)

    def get_all(self, name: str) -> list[str]:
        """Return every value for `name` in arrival order."""
        return self._items.getall(name, [])

    def items(self) -> list[Tuple[str, str]]:
        """Return a fresh list of (name, value) pairs."""
        return list(self._items.items())

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __iter__(self) -> Iterator[HTTPHeader]:
        for name, value in self._items.items():
            yield HTTPHeader(name, value)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderCollection):
            return NotImplemented
        return self.items() == other.items()

    def __repr__(self) -> str:
        return f"HeaderCollection({self.items()!r})"

    def __str__(self) -> str:
        # Wire form, one "Name: Value" per line
        return CRLF.join(str(header) for header in self)
