"""
=============================================================================
httpclient - A minimal HTTP/1.1 client
=============================================================================

Forms an HTTP/1.1 request from a URL string, writes it to a socket (TLS
for https), reads the response until the server closes the connection,
and splits it into status, headers and body.

=============================================================================
QUICK START
=============================================================================

    import httpclient

    # Body only
    body = httpclient.get("http://example.com/")

    # Full control
    request = httpclient.Request.new(
        "https://example.com/api",
        headers=[("accept", "application/json")],
    )
    response = request.execute()
    print(response.status)          # HTTP Response Code: 200 - OK
    print(response.get_header("Content-Type"))
    print(response.body)

    # asyncio
    body = await httpclient.async_get("http://example.com/")

=============================================================================
ARCHITECTURE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │  client.py          get / execute / execute_on                      │
    ├─────────────────────────────────────────────────────────────────────┤
    │  http/              Url, HeaderMap, Request, Response parsing       │
    ├─────────────────────────────────────────────────────────────────────┤
    │  core/              ByteStream, sockets, TLS, asyncio               │
    └─────────────────────────────────────────────────────────────────────┘

Each call opens its own connection and sends `connection: close`. There
is no keep-alive, pooling, redirect following, chunked decoding,
compression, cookie handling or retrying.

=============================================================================
"""

from .client import (
    execute,
    execute_on,
    get,
    get_http,
    get_https,
    receive_response,
    send_request,
)
from .config import ClientConfig, configure_logging
from .core import async_execute, async_get, open_stream, SocketStream, ByteStream
from .errors import (
    ClientError,
    ErrorKind,
    HttpMethodError,
    HttpsSslError,
    NetworkError,
    ParseError,
)
from .http import (
    HeaderMap,
    Request,
    RequestMethod,
    Response,
    ResponseParser,
    ResponseStatus,
    StatusCode,
    StatusKind,
    Url,
    default_headers,
    parse_response,
    parse_url,
    write_request,
)

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "get",
    "get_http",
    "get_https",
    "execute",
    "execute_on",
    "send_request",
    "receive_response",
    "async_get",
    "async_execute",

    # Message types
    "Url",
    "parse_url",
    "HeaderMap",
    "default_headers",
    "Request",
    "RequestMethod",
    "write_request",
    "Response",
    "ResponseParser",
    "ResponseStatus",
    "StatusCode",
    "StatusKind",
    "parse_response",

    # Transport
    "ByteStream",
    "SocketStream",
    "open_stream",

    # Configuration
    "ClientConfig",
    "configure_logging",

    # Errors
    "ClientError",
    "ErrorKind",
    "ParseError",
    "NetworkError",
    "HttpMethodError",
    "HttpsSslError",
]
