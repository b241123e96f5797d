"""
=============================================================================
HTTPREQ CLI ENTRY POINT
=============================================================================

Parse a raw HTTP request from a file or stdin and print it as JSON.

=============================================================================
USAGE
=============================================================================

    # Parse a saved request
    python -m httpreq request.txt

    # Pipe a hand-written request (LF line endings)
    printf 'GET /?q=1 HTTP/1.1\\nHost: x\\n\\n' | python -m httpreq --lf

    # Allow repeated parameter names
    python -m httpreq request.txt --duplicate-keys last_wins

Exit status: 0 on success, 1 for a malformed request, 2 if the input
cannot be read.

=============================================================================
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .config import LOG_FORMATS, LOG_LEVELS, ParserConfig, setup_logging
from .http.headers import CRLF
from .http.request import DuplicateKeyPolicy, HTTPParseError


logger = logging.getLogger("httpreq.cli")


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="httpreq",
        description="Parse a raw HTTP/1.1 request and print it as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httpreq request.txt                        # Parse a file
  cat request.txt | python -m httpreq                  # Parse stdin
  python -m httpreq request.txt --lf                   # Accept LF line endings
  python -m httpreq request.txt --duplicate-keys last_wins
        """
    )

    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="File containing the raw request (default: read stdin)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # PARSING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--lf",
        action="store_true",
        default=None,
        help="Convert bare LF line endings to CRLF before parsing"
    )

    parser.add_argument(
        "--duplicate-keys", "-d",
        choices=[policy.value for policy in DuplicateKeyPolicy],
        default=None,
        help="Repeated query/form parameter names: reject (error) or keep last (last_wins)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Log output format (default: text)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpreq {__version__}"
    )

    return parser


def load_config(args: argparse.Namespace) -> ParserConfig:
    """Environment first, then command-line overrides."""
    config = ParserConfig.from_env()

    if args.duplicate_keys is not None:
        config.duplicate_keys = DuplicateKeyPolicy(args.duplicate_keys)
    if args.lf is not None:
        config.normalize_newlines = args.lf
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_format is not None:
        config.log_format = args.log_format

    config.validate()
    return config


def read_request(path: Optional[str]) -> str:
    if path is None:
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def normalize_newlines(text: str) -> str:
    """Turn every line ending into CRLF."""
    return text.replace(CRLF, "\n").replace("\n", CRLF)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit status.
    """
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    setup_logging(config)
    logger.debug(f"Using config: {config}")

    try:
        text = read_request(args.file)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read request: {e}")
        return 2

    if config.normalize_newlines:
        text = normalize_newlines(text)

    try:
        request = config.create_parser().parse(text)
    except HTTPParseError as e:
        logger.warning(f"Malformed request: {e}")
        print(f"{e.status_code} Bad Request: {e}", file=sys.stderr)
        return 1

    logger.info(f"Parsed {request.method} {request.path}")
    print(json.dumps(request.to_dict(), indent=2))
    return 0


# =============================================================================
# ENTRY POINT
# =============================================================================
# This allows running: python -m httpreq

if __name__ == "__main__":
    sys.exit(main())
