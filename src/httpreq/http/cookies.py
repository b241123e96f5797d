"""
Request cookies.

The Cookie request header carries name/value pairs separated by "; ":

    Cookie: session=abc123; theme=dark
            ──────┬─────    ────┬────
               cookie 1      cookie 2

Only the Cookie header is read. Set-Cookie belongs to responses and is
never parsed here.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


COOKIE_SEPARATOR = "; "
COOKIE_VALUE_SEPARATOR = "="


@dataclass(frozen=True)
class HTTPCookie:
    """A single cookie sent by the client."""

    name: str
    value: str
    http_only: bool = False

    def __str__(self) -> str:
        text = f"{self.name}{COOKIE_VALUE_SEPARATOR}{self.value}"
        if self.http_only:
            text += f"{COOKIE_SEPARATOR}HttpOnly"
        return text


class CookieCollection:
    """Ordered, read-only collection of request cookies."""

    __slots__ = ("_cookies",)

    def __init__(self, cookies: Iterable[HTTPCookie] = ()):
        self._cookies: tuple[HTTPCookie, ...] = tuple(cookies)

    def contains(self, name: str) -> bool:
        return any(cookie.name == name for cookie in self._cookies)

    def get(self, name: str) -> Optional[HTTPCookie]:
        """Return the first cookie called `name`, or None."""
        for cookie in self._cookies:
            if cookie.name == name:
                return cookie
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)

    def __iter__(self) -> Iterator[HTTPCookie]:
        return iter(self._cookies)

    def __len__(self) -> int:
        return len(self._cookies)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CookieCollection):
            return NotImplemented
        return self._cookies == other._cookies

    def __repr__(self) -> str:
        return f"CookieCollection({list(self._cookies)!r})"

    def __str__(self) -> str:
        return COOKIE_SEPARATOR.join(str(cookie) for cookie in self._cookies)


def parse_cookie_header(value: Optional[str]) -> CookieCollection:
    """
    Parse a Cookie header value into a CookieCollection.

    Fragments are split on the first "=" only, so "token=a=b" gives a
    cookie named "token" with value "a=b". Fragments with no "=" or with
    an empty name or value are skipped. A missing or empty header gives
    an empty collection.

    Args:
        value: The raw Cookie header value, or None if the header is absent.

    Returns:
        Cookies in the order they appear. None of them is HTTP-only.
    """
    if not value:
        return CookieCollection()

    cookies = []
    for fragment in value.split(COOKIE_SEPARATOR):
        name, separator, cookie_value = fragment.partition(COOKIE_VALUE_SEPARATOR)
        if not separator or not name or not cookie_value:
            continue
        cookies.append(HTTPCookie(name, cookie_value, http_only=False))

    return CookieCollection(cookies)
