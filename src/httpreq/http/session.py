"""
Session interface.

Sessions are managed outside the parser. A ParsedRequest only holds a
reference to one, attached by the handling layer after parsing, so this
module declares the shape that layer is expected to provide.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HTTPSession(Protocol):
    """Server-side session attached to a request."""

    id: str

    def get_parameter(self, name: str) -> Any:
        ...

    def add_parameter(self, name: str, value: Any) -> None:
        ...

    def contains_parameter(self, name: str) -> bool:
        ...

    def clear_parameters(self) -> None:
        ...
