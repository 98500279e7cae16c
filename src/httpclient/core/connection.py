"""
=============================================================================
SOCKET TRANSPORT
=============================================================================

Opens the byte stream an HTTP exchange runs over.

=============================================================================
CONNECTION LIFECYCLE
=============================================================================

    open_stream(url)
        │
        ├── validate host / port ─────────────► ParseError
        │
        ├── socket.create_connection() ───────► NetworkError
        │
        ├── https? ── ssl wrap_socket() ──────► HttpsSslError
        │
        ▼
    SocketStream  OPEN
        │  write()  → sendall()
        │  read()   → recv() until b""     (server closes: connection: close)
        ▼
    SocketStream  CLOSED

One stream serves exactly one request/response. Nothing is pooled or
reused; a second request opens a second connection.

=============================================================================
TIMEOUTS
=============================================================================

The response is read until EOF. If the server never closes the socket,
only the socket timeout (ClientConfig.timeout) ends the read, as a
socket.timeout that read_response() turns into NetworkError.

=============================================================================
"""

import logging
import socket
import ssl
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..config import ClientConfig
from ..errors import HttpsSslError, NetworkError, ParseError
from ..http.url import Url


logger = logging.getLogger(__name__)


class StreamState(Enum):
    """Lifecycle of a SocketStream, used for logging and close()."""

    OPEN = "open"
    WRITING = "writing"
    READING = "reading"
    CLOSED = "closed"


@dataclass
class SocketStream:
    """
    A connected (optionally TLS-wrapped) socket exposed as a ByteStream.

    Attributes:
        socket: The connected socket (ssl.SSLSocket for https).
        address: (host, port) the socket is connected to.
        id: Short identifier used in log lines.
        state: Current lifecycle state.
        bytes_sent / bytes_received: Traffic counters.
    """

    socket: socket.socket
    address: tuple[str, int]

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: StreamState = StreamState.OPEN
    created_at: float = field(default_factory=time.time)
    bytes_sent: int = 0
    bytes_received: int = 0

    @property
    def is_secure(self) -> bool:
        return isinstance(self.socket, ssl.SSLSocket)

    @property
    def age(self) -> float:
        """Seconds since the stream was opened."""
        return time.time() - self.created_at

    def write(self, data: bytes) -> int:
        """
        Send all of `data`.

        sendall() loops until every byte is out; plain send() may stop
        after a partial write.
        """
        self.state = StreamState.WRITING
        self.socket.sendall(data)
        self.bytes_sent += len(data)
        return len(data)

    def flush(self) -> None:
        """Nothing is buffered; sendall() already pushed the bytes."""

    def read(self, size: int = 8192) -> bytes:
        """Receive up to `size` bytes; b"" means the peer closed."""
        self.state = StreamState.READING
        if size is None or size < 0:
            size = 8192
        data = self.socket.recv(size)
        self.bytes_received += len(data)
        return data

    def close(self) -> None:
        if self.state == StreamState.CLOSED:
            return

        try:
            self.socket.close()
        except OSError:
            pass  # Already gone

        self.state = StreamState.CLOSED
        logger.debug(
            f"[{self.id}] Closed {self.address[0]}:{self.address[1]} "
            f"(sent={self.bytes_sent}, received={self.bytes_received}, "
            f"{self.age * 1000:.2f}ms)"
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def resolve_address(url: Url) -> tuple[str, int]:
    """
    Turn a Url into a connectable (host, port) pair.

    Raises:
        ParseError: If the host is empty or the port is unset, not
                    numeric, or out of range.
    """
    if not url.host:
        raise ParseError(f"URL has no host: {url.full_url!r}")

    if not url.port:
        raise ParseError(
            f"No port for protocol {url.protocol!r} in {url.full_url!r}"
        )

    try:
        port = int(url.port)
    except ValueError:
        raise ParseError(f"Invalid port {url.port!r} in {url.full_url!r}") from None

    if not 0 < port < 65536:
        raise ParseError(f"Port out of range: {port}")

    return url.host, port


def create_tls_context(verify: bool = True) -> ssl.SSLContext:
    """
    Build the client TLS context.

    With verify=False the certificate chain and hostname are not
    checked; only for test servers with self-signed certificates.
    """
    context = ssl.create_default_context()
    if not verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def open_stream(
    url: Url,
    config: Optional[ClientConfig] = None,
    secure: Optional[bool] = None,
) -> SocketStream:
    """
    Connect to the URL's host:port and return a stream.

    Args:
        url: Target URL.
        config: Timeout and TLS settings. Defaults to ClientConfig().
        secure: Force TLS on (True) or off (False). None chooses by
                url.protocol ("https" → TLS).

    Raises:
        ParseError: URL cannot be connected to.
        NetworkError: TCP connect failed.
        HttpsSslError: TLS handshake failed.
    """
    config = config or ClientConfig()
    host, port = resolve_address(url)
    use_tls = url.is_https if secure is None else secure

    try:
        sock = socket.create_connection((host, port), timeout=config.timeout)
    except OSError as e:
        raise NetworkError(f"Failed to connect to {host}:{port}: {e}") from e

    if use_tls:
        try:
            context = create_tls_context(config.verify_tls)
            sock = context.wrap_socket(sock, server_hostname=host)
        except ssl.SSLError as e:
            sock.close()
            raise HttpsSslError(f"TLS handshake with {host}:{port} failed: {e}") from e
        except OSError as e:
            sock.close()
            raise NetworkError(f"Connection to {host}:{port} lost during TLS handshake: {e}") from e

    stream = SocketStream(socket=sock, address=(host, port))
    logger.debug(
        f"[{stream.id}] Connected to {host}:{port}"
        f"{' (TLS)' if use_tls else ''}"
    )
    return stream
