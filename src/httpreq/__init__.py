"""
=============================================================================
HTTPREQ - HTTP/1.1 Request Parser
=============================================================================

Turns raw HTTP/1.1 request text into an immutable, queryable
ParsedRequest: method, URL, path, headers, query parameters, form
parameters and cookies, all from one pass over the text.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpreq/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m httpreq)
    ├── config.py            # ParserConfig dataclass, logging setup
    └── http/                # HTTP protocol components
        ├── methods.py       # HTTPMethod enum
        ├── headers.py       # Header constants and collection
        ├── cookies.py       # Cookie parsing and collection
        ├── session.py       # Session interface
        └── request.py       # Request parsing

=============================================================================
QUICK START
=============================================================================

    from httpreq import parse_request, HTTPParseError

    try:
        request = parse_request(
            "GET /items?id=5 HTTP/1.1\\r\\n"
            "Host: example.com\\r\\n"
            "\\r\\n"
        )
    except HTTPParseError as e:
        ...  # answer with e.status_code (400)

    request.method            # HTTPMethod.GET
    request.path              # "/items"
    request.get_query("id")   # "5"

=============================================================================
"""

__version__ = "1.0.0"

from .config import ParserConfig
from .http import (
    DuplicateKeyPolicy,
    HTTPMethod,
    HTTPParseError,
    ParsedRequest,
    RequestParser,
    parse_request,
)

__all__ = [
    "ParsedRequest",
    "RequestParser",
    "HTTPParseError",
    "HTTPMethod",
    "DuplicateKeyPolicy",
    "ParserConfig",
    "parse_request",
    "__version__",
]
