"""
=============================================================================
COMMAND-LINE INTERFACE
=============================================================================

    python -m httpclient http://example.com/
    python -m httpclient -i https://example.com/
    python -m httpclient -X POST -H "content-type: application/json" \\
        -d '{"name": "alice"}' http://localhost:8080/api/users

Options:
    -X, --method      Request method (default: GET)
    -H, --header      Extra header "Key: Value" (repeatable)
    -d, --data        Request body; content-length is added if missing
    -i, --include     Print status line and headers before the body
    -t, --timeout     Socket timeout in seconds (default: 30)
    -k, --insecure    Skip TLS certificate verification
    -A, --user-agent  user-agent header value
    -l, --log-level   DEBUG, INFO, WARNING, ERROR (default: WARNING)
    --log-format      Access log format, text or json (default: text)

Unset options fall back to the HTTP_CLIENT_* environment variables
(see ClientConfig.from_env), e.g.

    HTTP_CLIENT_TIMEOUT=5 HTTP_CLIENT_LOG_FORMAT=json python -m httpclient -l INFO http://example.com/

Exit status is 0 when a response was received (whatever its status),
1 on a client error, 2 on bad arguments.

=============================================================================
"""

import argparse
import os
import sys
from typing import Optional

from . import __version__
from .client import execute
from .config import ClientConfig, configure_logging
from .errors import ClientError
from .http.headers import DEFAULT_USER_AGENT
from .http.request import Request
from .http.response import Response


def header_argument(value: str) -> tuple[str, str]:
    """argparse type for -H: "Key: Value" → ("Key", "Value")."""
    key, separator, header_value = value.partition(":")
    if not separator or not key.strip():
        raise argparse.ArgumentTypeError(f"Header must look like 'Key: Value', got {value!r}")
    return key.strip(), header_value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpclient",
        description="Minimal HTTP/1.1 client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httpclient http://example.com/
  python -m httpclient -i https://example.com/
  python -m httpclient -X DELETE http://localhost:8080/api/users/1
        """,
    )

    parser.add_argument("url", help="URL to request (scheme defaults to http)")

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--method", "-X",
        default="GET",
        help="Request method (default: GET)",
    )

    parser.add_argument(
        "--header", "-H",
        type=header_argument,
        action="append",
        default=[],
        help="Extra header as 'Key: Value'; repeatable",
    )

    parser.add_argument(
        "--data", "-d",
        default=None,
        help="Request body",
    )

    parser.add_argument(
        "--user-agent", "-A",
        default=None,
        help=f"user-agent header (default: $HTTP_CLIENT_USER_AGENT or {DEFAULT_USER_AGENT})",
    )

    # ─────────────────────────────────────────────────────────────────────
    # TRANSPORT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Socket timeout in seconds (default: $HTTP_CLIENT_TIMEOUT or 30)",
    )

    parser.add_argument(
        "--insecure", "-k",
        action="store_true",
        help="Do not verify TLS certificates",
    )

    # ─────────────────────────────────────────────────────────────────────
    # OUTPUT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--include", "-i",
        action="store_true",
        help="Print status and headers before the body",
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: $HTTP_CLIENT_LOG_LEVEL or WARNING)",
    )

    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default=None,
        help="Access log format (default: $HTTP_CLIENT_LOG_FORMAT or text)",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpclient {__version__}",
    )

    return parser


def format_head(response: Response) -> str:
    """Status and headers as printed by --include."""
    lines = [str(response.status)]
    for key, value in response.get_response_headers() or ():
        lines.append(f"{key}: {value}")
    return "\n".join(lines) + "\n\n"


def config_from_args(args: argparse.Namespace) -> ClientConfig:
    """
    Build the configuration: environment first, then explicit options.

    Options left unset on the command line keep the HTTP_CLIENT_*
    environment value. The log level falls back to WARNING rather than
    INFO so a plain invocation prints only the body.
    """
    config = ClientConfig.from_env()
    if "HTTP_CLIENT_LOG_LEVEL" not in os.environ:
        config.log_level = "WARNING"

    if args.timeout is not None:
        config.timeout = args.timeout
    if args.insecure:
        config.verify_tls = False
    if args.user_agent is not None:
        config.user_agent = args.user_agent
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_format is not None:
        config.log_format = args.log_format
    return config


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
        config.validate()
    except ValueError as e:
        parser.error(str(e))

    configure_logging(config)

    try:
        request = Request.new(
            args.url,
            headers=args.header,
            method=args.method.upper(),
            body=args.data,
            user_agent=config.user_agent,
        )
        has_length = any(key.lower() == "content-length" for key in request.headers)
        if args.data is not None and not has_length:
            request.add_header("content-length", str(len(args.data.encode("utf-8"))))

        response = execute(request, config)
    except ClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.include:
        sys.stdout.write(format_head(response))
    sys.stdout.write(response.body)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
