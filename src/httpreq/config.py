"""
=============================================================================
PARSER CONFIGURATION
=============================================================================

Centralized configuration for the request parser and its command-line
front end.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m httpreq --duplicate-keys last_wins               │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTPREQ_DUPLICATE_KEYS=last_wins python -m httpreq         │
    │                                                                      │
    │   3. Default values (in this dataclass)                             │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import json
import logging
import os
from dataclasses import dataclass

from .http.request import DuplicateKeyPolicy, RequestParser


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ParserConfig:
    """
    Configuration for request parsing.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    PARSING
    - duplicate_keys, normalize_newlines

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # PARSING
    # ─────────────────────────────────────────────────────────────────────

    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.ERROR
    """
    What happens when a query or form parameter name repeats.
    - error     - Reject the request as malformed (default)
    - last_wins - Keep the last value
    """

    normalize_newlines: bool = False
    """
    Convert bare LF line endings to CRLF before parsing.
    Useful when feeding hand-written request files; the wire format
    always uses CRLF.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    log_format: str = "text"
    """
    Log format: 'json' or 'text'.
    JSON is better for log aggregators, text for human reading.
    """

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTPREQ_DUPLICATE_KEYS      error | last_wins (default: error)
        HTTPREQ_NORMALIZE_NEWLINES  1/true/yes to enable (default: off)
        HTTPREQ_LOG_LEVEL           Logging level (default: INFO)
        HTTPREQ_LOG_FORMAT          text | json (default: text)

        =====================================================================
        """
        return cls(
            duplicate_keys=DuplicateKeyPolicy(os.getenv("HTTPREQ_DUPLICATE_KEYS", "error")),
            normalize_newlines=os.getenv("HTTPREQ_NORMALIZE_NEWLINES", "").lower() in ("1", "true", "yes"),
            log_level=os.getenv("HTTPREQ_LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("HTTPREQ_LOG_FORMAT", "text").lower(),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On an unknown log level, log format or policy.
        """
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}. Must be one of {', '.join(LOG_LEVELS)}.")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"Invalid log_format: {self.log_format}. Must be 'text' or 'json'.")

        # Raises ValueError for anything that is not a known policy
        DuplicateKeyPolicy(self.duplicate_keys)

    def create_parser(self) -> RequestParser:
        """Build a RequestParser using these settings."""
        return RequestParser(duplicate_keys=self.duplicate_keys)


class JSONFormatter(logging.Formatter):
    """Render each log record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, LOG_DATEFMT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(config: ParserConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    if config.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))

    # Configure root logger
    logging.basicConfig(level=level, handlers=[handler], force=True)

    # Set httpreq logger level
    logging.getLogger("httpreq").setLevel(level)
