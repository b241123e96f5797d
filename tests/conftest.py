"""
pytest configuration and fixtures.
"""

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpreq import ParserConfig
from httpreq.http import RequestParser


@pytest.fixture
def sample_get_request() -> str:
    """Sample HTTP GET request with query string and cookies."""
    return (
        "GET /api/users?page=1&limit=10 HTTP/1.1\r\n"
        "Host: localhost:8080\r\n"
        "User-Agent: pytest\r\n"
        "Accept: application/json\r\n"
        "Cookie: session=abc123; theme=dark\r\n"
        "\r\n"
    )


@pytest.fixture
def sample_post_request() -> str:
    """Sample HTTP POST request with a form-encoded body."""
    body = "name=John&age=30"
    return (
        "POST /register HTTP/1.1\r\n"
        "Host: localhost:8080\r\n"
        "Content-Type: application/x-www-form-urlencoded\r\n"
        f"Content-Length: {len(body)}\r\n"
        "\r\n"
    ) + body


@pytest.fixture
def parser() -> RequestParser:
    """Parser with the default (reject duplicates) policy."""
    return RequestParser()


@pytest.fixture
def config() -> ParserConfig:
    """Default test parser configuration."""
    return ParserConfig(log_level="WARNING")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove all HTTPREQ_* variables from the environment."""
    for name in (
        "HTTPREQ_DUPLICATE_KEYS",
        "HTTPREQ_NORMALIZE_NEWLINES",
        "HTTPREQ_LOG_LEVEL",
        "HTTPREQ_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
