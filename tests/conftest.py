"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Generator, Optional
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpclient import ClientConfig


class FakeStream:
    """
    In-memory ByteStream.

    Records everything written and serves `response` to reads. Set
    fail_on_write, fail_on_flush or fail_on_read to make the matching
    call raise OSError.
    """

    def __init__(
        self,
        response: bytes = b"",
        fail_on_write: Optional[int] = None,
        fail_on_read: bool = False,
        fail_on_flush: bool = False,
    ):
        self.written = bytearray()
        self.writes = 0
        self.flushed = False
        self.closed = False
        self._response = response
        self._offset = 0
        self._fail_on_write = fail_on_write
        self._fail_on_read = fail_on_read
        self._fail_on_flush = fail_on_flush

    def write(self, data: bytes) -> int:
        self.writes += 1
        if self._fail_on_write is not None and self.writes >= self._fail_on_write:
            raise BrokenPipeError("peer closed")
        self.written.extend(data)
        return len(data)

    def flush(self) -> None:
        if self._fail_on_flush:
            raise BrokenPipeError("peer closed")
        self.flushed = True

    def read(self, size: int = -1) -> bytes:
        if self._fail_on_read:
            raise ConnectionResetError("connection reset by peer")
        if size is None or size < 0:
            size = len(self._response) - self._offset
        chunk = self._response[self._offset:self._offset + size]
        self._offset += len(chunk)
        return chunk

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def sample_response() -> bytes:
    """Sample HTTP 200 response."""
    return (
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: text/plain\r\n"
        b"x: 1\r\n"
        b"\r\n"
        b"body"
    )


@pytest.fixture
def not_found_response() -> bytes:
    """Sample HTTP 404 response with a multi-word reason phrase."""
    return (
        b"HTTP/1.1 404 Not Found\r\n"
        b"Content-Length: 9\r\n"
        b"\r\n"
        b"not found"
    )


@pytest.fixture
def config() -> ClientConfig:
    """Default test client configuration."""
    return ClientConfig(timeout=5.0, log_level="WARNING")


class LoopbackServer:
    """
    One-shot TCP server running in a background thread.

    Accepts connections, reads each request up to the end of its header
    block (plus `content-length` bytes of body), records it, sends the
    canned response and closes the socket.
    """

    def __init__(self, response: bytes, parse_request: bool = True):
        self.response = response
        # False: answer after the first recv() without looking at it
        self.parse_request = parse_request
        self.requests: list[bytes] = []
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._socket.bind(("127.0.0.1", 0))
        self._socket.listen(8)
        self._socket.settimeout(5.0)
        self.port = self._socket.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._stopped = threading.Event()

    def start(self) -> "LoopbackServer":
        self._thread.start()
        return self

    def _serve(self):
        while not self._stopped.is_set():
            try:
                conn, _ = self._socket.accept()
            except OSError:
                return
            with conn:
                conn.settimeout(5.0)
                try:
                    if self.parse_request:
                        self.requests.append(self._read_request(conn))
                    else:
                        self.requests.append(conn.recv(65536))
                    conn.sendall(self.response)
                except OSError:
                    continue

    def _read_request(self, conn: socket.socket) -> bytes:
        data = b""
        while b"\r\n\r\n" not in data:
            chunk = conn.recv(4096)
            if not chunk:
                return data
            data += chunk

        head, _, body = data.partition(b"\r\n\r\n")
        length = 0
        for line in head.split(b"\r\n")[1:]:
            name, _, value = line.partition(b":")
            if name.strip().lower() == b"content-length":
                length = int(value.strip())
        while len(body) < length:
            chunk = conn.recv(4096)
            if not chunk:
                break
            body += chunk
        return head + b"\r\n\r\n" + body

    def stop(self):
        self._stopped.set()
        self._socket.close()
        self._thread.join(timeout=5.0)


@pytest.fixture
def loopback_server(sample_response: bytes) -> Generator[LoopbackServer, None, None]:
    """A running LoopbackServer answering with `sample_response`."""
    server = LoopbackServer(sample_response).start()
    yield server
    server.stop()


@pytest.fixture
def closed_port() -> int:
    """A local port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class SilentServer:
    """Accepts connections and never answers until stopped."""

    def __init__(self):
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._socket.bind(("127.0.0.1", 0))
        self._socket.listen(8)
        self.port = self._socket.getsockname()[1]

    def stop(self):
        self._socket.close()


@pytest.fixture
def silent_server() -> Generator[SilentServer, None, None]:
    """A listening socket whose connections never get a response."""
    server = SilentServer()
    yield server
    server.stop()
