"""
=============================================================================
HTTP REQUEST METHODS
=============================================================================

The closed set of request methods the parser recognizes:

    GET  POST  PUT  DELETE  PATCH  HEAD  OPTIONS  TRACE  CONNECT

=============================================================================
TOKEN NORMALIZATION
=============================================================================

The method token from the request line is normalized by capitalizing it
("get", "GET" and "gEt" all become "Get") and then looked up in a table
that is built once at import time. Unknown tokens return None; the
request parser turns that into a 400 Bad Request.

=============================================================================
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class HTTPMethod(str, Enum):
    """
    HTTP request methods.

    Extends str, so members compare equal to their wire token:

        >>> HTTPMethod.GET == "GET"
        True
    """

    GET = "GET"          # Retrieve resource
    POST = "POST"        # Create resource / submit data
    PUT = "PUT"          # Replace resource
    DELETE = "DELETE"    # Delete resource
    PATCH = "PATCH"      # Partial update
    HEAD = "HEAD"        # GET without body
    OPTIONS = "OPTIONS"  # Get allowed methods (CORS preflight)
    TRACE = "TRACE"      # Echo request (debugging)
    CONNECT = "CONNECT"  # Establish tunnel (HTTPS proxy)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_token(cls, token: str) -> Optional["HTTPMethod"]:
        """
        Look up a method by its request-line token.

        Args:
            token: Raw method token, any case.

        Returns:
            The matching HTTPMethod, or None if the token is not a known method.
        """
        return _METHODS_BY_TOKEN.get(token.capitalize())


# Read-only process-wide lookup table: "Get" -> HTTPMethod.GET, ...
_METHODS_BY_TOKEN: Mapping[str, HTTPMethod] = MappingProxyType(
    {method.value.capitalize(): method for method in HTTPMethod}
)
