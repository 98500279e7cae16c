"""
asyncio transport.

Same exchange as httpclient.client.execute, but the socket work is done
with asyncio streams so many requests can be in flight on one event loop.
Serialization and parsing are shared with the synchronous path:

    request.to_bytes()  →  writer.write()
    reader.read()       →  ResponseParser().parse()

The timeout from ClientConfig covers the whole exchange (connect, write
and read to EOF), via asyncio.wait_for.
"""

import asyncio
import logging
import ssl
import time
from typing import Optional, Union

from ..access_log import log_exchange, log_failure, new_request_id
from ..config import ClientConfig
from ..errors import ClientError, HttpsSslError, NetworkError
from ..http.request import Request
from ..http.response import Response, ResponseParser
from ..http.url import Url
from .connection import create_tls_context, resolve_address


logger = logging.getLogger(__name__)


async def _exchange(request: Request, config: ClientConfig) -> Response:
    host, port = resolve_address(request.url)
    context = create_tls_context(config.verify_tls) if request.is_https else None

    try:
        reader, writer = await asyncio.open_connection(
            host,
            port,
            ssl=context,
            server_hostname=host if context else None,
        )
    except ssl.SSLError as e:
        raise HttpsSslError(f"TLS handshake with {host}:{port} failed: {e}") from e
    except OSError as e:
        raise NetworkError(f"Failed to connect to {host}:{port}: {e}") from e

    try:
        writer.write(request.to_bytes())
        await writer.drain()
        data = await reader.read()
    except OSError as e:
        raise NetworkError(f"Exchange with {host}:{port} failed: {e}") from e
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass  # Peer already closed

    return ResponseParser().parse(data)


async def async_execute(
    request: Request,
    config: Optional[ClientConfig] = None,
) -> Response:
    """
    Send `request` and return the parsed response, without blocking the loop.

    Raises:
        ParseError, NetworkError, HttpsSslError: as execute().
    """
    config = config or ClientConfig()
    request_id = new_request_id()
    start_time = time.time()

    try:
        try:
            response = await asyncio.wait_for(
                _exchange(request, config), timeout=config.timeout
            )
        except asyncio.TimeoutError as e:
            raise NetworkError(
                f"Timed out after {config.timeout}s: {request.url.full_url}"
            ) from e
    except ClientError as e:
        log_failure(request_id, request, e, (time.time() - start_time) * 1000)
        raise

    log_exchange(
        request_id, request, response,
        (time.time() - start_time) * 1000, config.log_format,
    )
    return response


async def async_get(url: Union[str, Url], config: Optional[ClientConfig] = None) -> str:
    """Async counterpart of httpclient.get(): returns only the body."""
    config = config or ClientConfig()
    request = Request.default_get_request(url, user_agent=config.user_agent)
    response = await async_execute(request, config)
    return response.body
