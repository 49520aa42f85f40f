# Courier Command Line
"""
Send a single JSON request through the pipeline.

Usage:
    python -m courier GET https://api.example.com/items/7
    python -m courier POST https://api.example.com/items --json '{"name": "x"}' -H "Authorization: Bearer abc"

Exit codes:
    0 - Request completed, decoded JSON printed to stdout
    1 - Request failed, classified error printed to stderr
    2 - Invalid arguments
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from courier.config import settings
from courier.delegates import HTTPRequest, JSONCallDelegate
from courier.engine import PipelineEngine
from courier.errors import PipelineError
from courier.log import configure_logging
from courier.log_handlers import StdlibLogHandler
from courier.transport import close_default_session

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _parse_headers(parser: argparse.ArgumentParser, values: List[str]) -> Dict[str, str]:
    headers = {}
    for value in values:
        name, sep, content = value.partition(":")
        if not sep or not name.strip():
            parser.error(f"Invalid header (expected 'Name: value'): {value}")
        headers[name.strip()] = content.strip()
    return headers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="courier",
        description="Send one JSON request through the courier pipeline",
    )
    parser.add_argument("method", help="HTTP method (GET, POST, ...)")
    parser.add_argument("url", help="Absolute URL, or a path relative to COURIER_BASE_URL")
    parser.add_argument(
        "-H", "--header", action="append", default=[], dest="headers",
        help="Request header as 'Name: value' (repeatable)",
    )
    parser.add_argument("--json", dest="body", help="JSON request body")
    parser.add_argument("--label", help="Label recorded on the request")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument(
        "--log-level", default=settings.log_level, type=str.upper,
        choices=LOG_LEVELS, help="Logging level",
    )
    return parser


async def run(request: HTTPRequest, label: Optional[str] = None) -> Any:
    engine = PipelineEngine(label="cli").log_handler(StdlibLogHandler())
    try:
        return await engine.send(JSONCallDelegate(), request, label=label)
    finally:
        await close_default_session()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    body = None
    if args.body is not None:
        try:
            body = json.loads(args.body)
        except json.JSONDecodeError as e:
            parser.error(f"--json is not valid JSON: {e}")

    configure_logging(args.log_level)
    request = HTTPRequest(
        method=args.method,
        url=args.url,
        headers=_parse_headers(parser, args.headers),
        json=body,
        timeout=args.timeout,
    )

    try:
        content = asyncio.run(run(request, label=args.label))
    except PipelineError as e:
        print(f"Request failed ({e.phase.value}): {e.cause}", file=sys.stderr)
        return 1

    print(json.dumps(content, indent=2))
    return 0
