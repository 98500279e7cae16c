"""
=============================================================================
CLIENT - UNIFIED DISPATCH
=============================================================================

Ties the message layer (httpclient.http) to a transport (httpclient.core).

=============================================================================
REQUEST FLOW
=============================================================================

    get("https://example.com/")
        │
        ▼
    Request.default_get_request(url)
        │
        ▼
    execute(request)
        │
        ├── opener(url, config) ──────► ByteStream   (plain or TLS by protocol)
        │
        ├── execute_on(stream, request)
        │       ├── send_request()      write_request + flush
        │       └── receive_response()  read to EOF + ResponseParser
        │
        ├── stream.close()
        │
        └── access log record
        │
        ▼
    Response(status, headers, body)

execute_on() is the seam: it works on any ByteStream, so transports can be
swapped (or faked in tests) without touching the parsing code.

=============================================================================
ERROR BEHAVIOUR
=============================================================================

- Transport failures raise immediately (NetworkError / HttpsSslError).
  Nothing is retried.
- A response that cannot be understood is still returned, with the
  FAILURE status sentinel. Check `response.status.code.is_sentinel`.
- get() returns only the body, so a FAILURE status is invisible to its
  callers. Use Request.execute() when the status matters.

=============================================================================
"""

import functools
import logging
import time
from typing import Callable, Optional, Union

from .access_log import log_exchange, log_failure, new_request_id
from .config import ClientConfig
from .core.connection import open_stream, resolve_address
from .core.stream import ByteStream
from .errors import ClientError, NetworkError
from .http.request import Request, write_request
from .http.response import DEFAULT_BUFFER_SIZE, Response, ResponseParser, read_response
from .http.url import Url


logger = logging.getLogger(__name__)

# (url, config) -> connected stream
StreamOpener = Callable[[Url, ClientConfig], ByteStream]


def send_request(stream: ByteStream, request: Request) -> None:
    """
    Write `request` onto `stream` and flush it.

    Raises:
        NetworkError: If writing or flushing fails.
    """
    write_request(stream, request)
    try:
        stream.flush()
    except OSError as e:
        raise NetworkError(f"Failed to flush request: {e}") from e


def receive_response(
    stream: ByteStream,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> Response:
    """Read `stream` to EOF and parse what arrived."""
    data = read_response(stream, buffer_size)
    return ResponseParser().parse(data)


def execute_on(
    stream: ByteStream,
    request: Request,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> Response:
    """
    Run one exchange over a caller-owned stream.

    The stream is not closed; the caller opened it, the caller closes it.
    """
    send_request(stream, request)
    return receive_response(stream, buffer_size)


def execute(
    request: Request,
    config: Optional[ClientConfig] = None,
    opener: Optional[StreamOpener] = None,
) -> Response:
    """
    Open a stream for `request`, run the exchange, close the stream.

    Args:
        request: The request to send.
        config: Client settings. Defaults to ClientConfig().
        opener: Callable returning a connected ByteStream for a Url.
                Defaults to open_stream (TLS for https, plain otherwise).

    Returns:
        The parsed Response.

    Raises:
        ParseError: The URL has no usable host or port.
        NetworkError: Connecting, writing or reading failed.
        HttpsSslError: TLS could not be established.
    """
    config = config or ClientConfig()
    opener = opener or open_stream
    request_id = new_request_id()
    start_time = time.time()

    logger.debug(f"[{request_id}] {request.request_line} -> {request.url.host_with_port}")

    try:
        resolve_address(request.url)
        stream = opener(request.url, config)
        try:
            response = execute_on(stream, request, config.buffer_size)
        finally:
            stream.close()
    except ClientError as e:
        log_failure(request_id, request, e, (time.time() - start_time) * 1000)
        raise

    duration_ms = (time.time() - start_time) * 1000
    if response.status.code.is_sentinel:
        logger.warning(f"[{request_id}] Could not classify response status: {response.status}")

    log_exchange(request_id, request, response, duration_ms, config.log_format)
    return response


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def get(url: Union[str, Url], config: Optional[ClientConfig] = None) -> str:
    """
    GET `url` and return the body.

    TLS is used when the protocol is "https", a plain socket otherwise.

    Example:
        body = get("http://example.com/")
    """
    config = config or ClientConfig()
    request = Request.default_get_request(url, user_agent=config.user_agent)
    return execute(request, config).body


def get_http(url: Union[str, Url], config: Optional[ClientConfig] = None) -> str:
    """GET `url` over a plain TCP socket, whatever the protocol says."""
    config = config or ClientConfig()
    request = Request.default_get_request(url, user_agent=config.user_agent)
    opener = functools.partial(open_stream, secure=False)
    return execute(request, config, opener=opener).body


def get_https(url: Union[str, Url], config: Optional[ClientConfig] = None) -> str:
    """GET `url` over TLS, whatever the protocol says."""
    config = config or ClientConfig()
    request = Request.default_get_request(url, user_agent=config.user_agent)
    opener = functools.partial(open_stream, secure=True)
    return execute(request, config, opener=opener).body
