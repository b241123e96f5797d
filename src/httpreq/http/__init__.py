"""
=============================================================================
HTTP PROTOCOL PACKAGE
=============================================================================

Everything needed to turn raw request text into a ParsedRequest.

    http/
    ├── methods.py   # HTTPMethod enum
    ├── headers.py   # Protocol constants, HeaderCollection
    ├── cookies.py   # HTTPCookie, CookieCollection
    ├── session.py   # HTTPSession interface
    └── request.py   # RequestParser, ParsedRequest, HTTPParseError

=============================================================================
"""

from .cookies import CookieCollection, HTTPCookie, parse_cookie_header
from .headers import HeaderCollection, HTTPHeader
from .methods import HTTPMethod
from .request import (
    DuplicateKeyPolicy,
    HTTPParseError,
    ParsedRequest,
    RequestParser,
    parse_request,
)
from .session import HTTPSession

# Public API - what you get when you do:
# from httpreq.http import *
__all__ = [
    # Request parsing
    "ParsedRequest",
    "RequestParser",
    "HTTPParseError",
    "DuplicateKeyPolicy",
    "parse_request",

    # Request components
    "HTTPMethod",
    "HTTPHeader",
    "HeaderCollection",
    "HTTPCookie",
    "CookieCollection",
    "parse_cookie_header",
    "HTTPSession",
]
