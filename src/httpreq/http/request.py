"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Parses raw HTTP/1.1 request text into structured ParsedRequest objects.

=============================================================================
HTTP REQUEST ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP REQUEST STRUCTURE                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  REQUEST LINE                                                        │
    │      POST /login?next=/home#top HTTP/1.1\r\n                         │
    │      ─┬── ─────────┬──────────  ───┬────                             │
    │     Method        URL           Protocol                             │
    │                    │                                                 │
    │         ┌──────────┼────────────┐                                    │
    │       Path    Query String   Fragment                                │
    │      /login    next=/home      top                                   │
    │                                                                      │
    │  HEADERS (one per line, "Name: Value")                               │
    │      Host: example.com\r\n                                           │
    │      Cookie: lang=en; theme=dark\r\n                                 │
    │                                                                      │
    │  BLANK LINE                                                          │
    │      \r\n                                                            │
    │                                                                      │
    │  BODY (last line, form encoded)                                      │
    │      username=john&password=secret                                   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
DELIMITERS
=============================================================================

    Header name / value      ": "
    Parameter separator      "&"
    Parameter name / value   "="    (first occurrence)
    Cookie separator         "; "
    Cookie name / value      "="    (first occurrence)
    URL query / fragment     "?" and "#"

=============================================================================
ERRORS
=============================================================================

Every structural problem is reported the same way: HTTPParseError with
status code 400. There is no partial result. Either the whole request
parses, or nothing is returned.

=============================================================================
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .cookies import CookieCollection, parse_cookie_header
from .headers import COOKIE, CRLF, HEADER_SEPARATOR, HOST, HTTP_1_1, HeaderCollection
from .methods import HTTPMethod
from .session import HTTPSession


class HTTPParseError(Exception):
    """
    Raised when a request is malformed.

    Carries the HTTP status code the transport layer should answer with.
    The parser only ever uses 400 Bad Request.
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class DuplicateKeyPolicy(str, Enum):
    """What to do when a query or form parameter name repeats."""

    ERROR = "error"          # Reject the request
    LAST_WINS = "last_wins"  # Keep the last value seen


@dataclass(frozen=True)
class ParsedRequest:
    """
    A fully parsed HTTP request.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:       HTTPMethod from the request line
        url:          Request target exactly as sent ("/a?b=1#c")
        path:         URL up to the first "?" or "#" ("/a")
        headers:      Ordered, read-only HeaderCollection
        query_params: Read-only mapping from the query string
        form_params:  Read-only mapping from the form-encoded body
        cookies:      Read-only CookieCollection from the Cookie header
        body:         Raw body line ("" when there is none)
        session:      Attached by the handling layer, never by the parser

    =========================================================================

    Instances are frozen. The only later change allowed is a single call
    to attach_session().

    Raises:
        HTTPParseError: If `path` is empty or contains "?" or "#", or if
                        there is no Host header.
    """

    method: HTTPMethod
    url: str
    path: str
    headers: HeaderCollection
    query_params: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    form_params: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    cookies: CookieCollection = field(default_factory=CookieCollection)
    body: str = ""
    session: Optional[HTTPSession] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if not self.path or "?" in self.path or "#" in self.path:
            raise HTTPParseError(f"Invalid path: {self.path!r}")

        if not self.headers.contains(HOST):
            raise HTTPParseError("Missing Host header")

        # Private copies, so the caller's dicts cannot change this request
        object.__setattr__(self, "query_params", MappingProxyType(dict(self.query_params)))
        object.__setattr__(self, "form_params", MappingProxyType(dict(self.form_params)))

    @property
    def host(self) -> str:
        """Value of the Host header."""
        return self.headers.get(HOST, "")

    def attach_session(self, session: HTTPSession) -> None:
        """
        Attach the session for this request.

        Raises:
            RuntimeError: If a session is already attached.
        """
        if self.session is not None:
            raise RuntimeError("A session is already attached to this request")
        object.__setattr__(self, "session", session)

    def get_header(self, name: str, default: str = "") -> str:
        """First value of a header (exact-case name), or `default`."""
        return self.headers.get(name, default)

    def get_query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.query_params.get(name, default)

    def get_form(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.form_params.get(name, default)

    def get_cookie(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Value of the first cookie called `name`, or `default`."""
        cookie = self.cookies.get(name)
        return cookie.value if cookie is not None else default

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "method": self.method.value,
            "url": self.url,
            "path": self.path,
            "headers": [[header.name, header.value] for header in self.headers],
            "query_params": dict(self.query_params),
            "form_params": dict(self.form_params),
            "cookies": [
                {"name": cookie.name, "value": cookie.value, "http_only": cookie.http_only}
                for cookie in self.cookies
            ],
        }


class RequestParser:
    """
    Parses raw HTTP request text into ParsedRequest objects.

    ==========================================================================
    PARSER ARCHITECTURE
    ==========================================================================

        Raw Request Text
              │
              ▼
        ┌───────────────────────────────────────────────────────────────┐
        │  1. Split on CRLF (empty lines kept)                          │
        │  2. Request line  ──► method, url, protocol                   │
        │  3. Method token  ──► HTTPMethod                              │
        │  4. URL           ──► path                                    │
        │  5. Header lines  ──► HeaderCollection (Host required)        │
        │  6. Cookie header ──► CookieCollection                        │
        │  7. Query string  ──► query_params                            │
        │  8. Last line     ──► form_params                             │
        └───────────────────────────────────────────────────────────────┘
              │
              ▼
        ParsedRequest (frozen)

    Any step can raise HTTPParseError, which aborts the whole parse.

    ==========================================================================

    The parser keeps no state between calls, so one instance can be
    shared across threads.
    """

    URL_SEPARATORS = re.compile(r"[?#]")
    QUERY_SEPARATOR = "?"
    PARAMETER_SEPARATOR = "&"
    PARAMETER_VALUE_SEPARATOR = "="

    def __init__(self, duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.ERROR):
        """
        Initialize the request parser.

        Args:
            duplicate_keys: How repeated query/form parameter names are
                            handled. ERROR rejects the request, LAST_WINS
                            keeps the last value.
        """
        self.duplicate_keys = DuplicateKeyPolicy(duplicate_keys)

    def parse(self, text: str) -> ParsedRequest:
        """
        Parse raw HTTP request text into a ParsedRequest.

        Args:
            text: The complete request: request line, headers, blank line
                  and optional body, separated by CRLF.

        Returns:
            Parsed ParsedRequest object.

        Raises:
            HTTPParseError: If the request is malformed.
        """
        # =====================================================================
        # STEP 1: Split into lines
        # =====================================================================
        # Empty lines are kept: the first one ends the header block.
        #
        lines = text.split(CRLF)

        # =====================================================================
        # STEP 2-4: Request line, method, url and path
        # =====================================================================
        method, url = self._parse_request_line(lines[0])
        path = self._parse_path(url)

        # =====================================================================
        # STEP 5-6: Headers and cookies
        # =====================================================================
        headers = self._parse_headers(lines[1:])
        cookies = parse_cookie_header(headers.get(COOKIE))

        # =====================================================================
        # STEP 7-8: Query and form parameters
        # =====================================================================
        # The body is whatever follows the last CRLF. For a request
        # without a body that is the empty string after the blank line.
        #
        query_params = self._parse_query_parameters(url)
        body = lines[-1]
        form_params = self._parse_form_parameters(body)

        return ParsedRequest(
            method=method,
            url=url,
            path=path,
            headers=headers,
            query_params=query_params,
            form_params=form_params,
            cookies=cookies,
            body=body,
        )

    def _parse_request_line(self, line: str) -> tuple[HTTPMethod, str]:
        """
        Parse the request line into (method, url).

        Format: METHOD SP URL SP PROTOCOL. Repeated spaces count as one.
        The protocol must be HTTP/1.1 (any case).
        """
        tokens = [token for token in line.strip().split(" ") if token]
        if len(tokens) != 3:
            raise HTTPParseError(f"Invalid request line: {line!r}")

        method_token, url, protocol = tokens
        if protocol.upper() != HTTP_1_1:
            raise HTTPParseError(f"Unsupported protocol: {protocol}")

        method = HTTPMethod.from_token(method_token)
        if method is None:
            raise HTTPParseError(f"Invalid method: {method_token}")

        return method, url

    def _split_url(self, url: str) -> list[str]:
        """Split on "?" and "#", dropping empty segments."""
        return [segment for segment in self.URL_SEPARATORS.split(url) if segment]

    def _parse_path(self, url: str) -> str:
        segments = self._split_url(url)
        if not segments:
            raise HTTPParseError(f"Invalid URL: {url!r}")
        return segments[0]

    def _parse_headers(self, lines: list[str]) -> HeaderCollection:
        """
        Parse header lines up to the first empty line.

        Each line is split on the first ": ". A line without it, a request
        that never reaches the blank line, or a request without a Host
        header is malformed.
        """
        pairs = []
        for line in lines:
            if not line:
                break

            name, separator, value = line.partition(HEADER_SEPARATOR)
            if not separator or not name:
                raise HTTPParseError(f"Invalid header line: {line!r}")
            pairs.append((name, value))
        else:
            raise HTTPParseError("Incomplete request: no header terminator")

        headers = HeaderCollection(pairs)
        if not headers.contains(HOST):
            raise HTTPParseError("Missing Host header")

        return headers

    def _parse_query_parameters(self, url: str) -> Dict[str, str]:
        """
        Parse the query string of `url`.

        A URL without "?" has no parameters. Otherwise the second "?"/"#"
        segment is the query string and must be non-empty with at least
        one "&"-separated token.
        """
        if self.QUERY_SEPARATOR not in url:
            return {}

        segments = self._split_url(url)
        query_string = segments[1] if len(segments) > 1 else ""
        tokens = self._split_parameters(query_string)

        if not self._is_valid_query_string(query_string, tokens):
            raise HTTPParseError(f"Invalid query string in URL: {url!r}")

        return self._collect_parameters(tokens, "query")

    @staticmethod
    def _is_valid_query_string(query_string: str, tokens: list[str]) -> bool:
        # Both conditions must hold. A non-empty string always has a token
        # unless it is made only of "&".
        return bool(query_string) and len(tokens) >= 1

    def _parse_form_parameters(self, body: str) -> Dict[str, str]:
        """Parse a form-encoded body. An empty body has no parameters."""
        if not body:
            return {}
        return self._collect_parameters(self._split_parameters(body), "form")

    def _split_parameters(self, text: str) -> list[str]:
        return [token for token in text.split(self.PARAMETER_SEPARATOR) if token]

    def _collect_parameters(self, tokens: list[str], kind: str) -> Dict[str, str]:
        """
        Build a parameter dict from "name=value" tokens.

        The value is everything after the first "=" and may be empty:
        "flag=" is accepted as {"flag": ""} rather than rejected. A token
        without "=" or with an empty name is malformed. Repeated names
        follow self.duplicate_keys.
        """
        params: Dict[str, str] = {}
        for token in tokens:
            name, separator, value = token.partition(self.PARAMETER_VALUE_SEPARATOR)
            if not separator or not name:
                raise HTTPParseError(f"Invalid {kind} parameter: {token!r}")

            if name in params and self.duplicate_keys is DuplicateKeyPolicy.ERROR:
                raise HTTPParseError(f"Duplicate {kind} parameter: {name!r}")
            params[name] = value

        return params


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def parse_request(
    text: str,
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.ERROR,
) -> ParsedRequest:
    """
    Convenience function to parse an HTTP request.

    Use RequestParser directly to parse many requests with the same
    settings.

    Args:
        text: Raw HTTP request text.
        duplicate_keys: Policy for repeated query/form parameter names.

    Returns:
        Parsed ParsedRequest object.
    """
    parser = RequestParser(duplicate_keys=duplicate_keys)
    return parser.parse(text)
