"""
=============================================================================
CORE TRANSPORT
=============================================================================

Where bytes actually move. The HTTP layer never imports from here; it is
written against the ByteStream protocol, and this package supplies the
implementations.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ ByteStream (stream.py)                                              │
    │   write / flush / read / close                                      │
    ├─────────────────────────────────────────────────────────────────────┤
    │ SocketStream, open_stream (connection.py)                           │
    │   TCP socket, TLS-wrapped for https                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │ async_execute, async_get (aio.py)                                   │
    │   asyncio streams, one task per exchange                            │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .stream import ByteStream
from .connection import (
    SocketStream,
    StreamState,
    open_stream,
    resolve_address,
    create_tls_context,
)
from .aio import async_execute, async_get

__all__ = [
    "ByteStream",
    "SocketStream",
    "StreamState",
    "open_stream",
    "resolve_address",
    "create_tls_context",
    "async_execute",
    "async_get",
]
