"""
=============================================================================
HTTP MESSAGE LAYER
=============================================================================

Everything that knows what an HTTP message looks like. Nothing in here
opens a socket: requests are written to, and responses read from, any
object with write()/read() (see httpclient.core.stream.ByteStream).

    ┌─────────────────────────────────────────────────────────────────────┐
    │ URL (url.py)                                                        │
    │   "https://h:8443/x" → Url(protocol, host, port, path)              │
    ├─────────────────────────────────────────────────────────────────────┤
    │ HEADERS (headers.py)                                                │
    │   HeaderMap, default_headers(url)                                   │
    ├─────────────────────────────────────────────────────────────────────┤
    │ REQUEST (request.py)                                                │
    │   Request, RequestMethod, write_request(stream, request)            │
    ├─────────────────────────────────────────────────────────────────────┤
    │ STATUS CODES (status_codes.py)                                      │
    │   StatusCode.from_code("404") → CLIENT_ERROR(404)                   │
    ├─────────────────────────────────────────────────────────────────────┤
    │ RESPONSE (response.py)                                              │
    │   ResponseParser().parse(raw) → Response(status, headers, body)     │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .url import Url, parse_url, to_url
from .headers import HeaderMap, default_headers, add_header, DEFAULT_USER_AGENT
from .request import Request, RequestMethod, write_request
from .status_codes import StatusCode, StatusKind, ResponseStatus
from .response import Response, ResponseParser, parse_response, read_response

__all__ = [
    # URL parsing
    "Url",
    "parse_url",
    "to_url",

    # Headers
    "HeaderMap",
    "default_headers",
    "add_header",
    "DEFAULT_USER_AGENT",

    # Request building
    "Request",
    "RequestMethod",
    "write_request",

    # Status codes
    "StatusCode",
    "StatusKind",
    "ResponseStatus",

    # Response parsing
    "Response",
    "ResponseParser",
    "parse_response",
    "read_response",
]
