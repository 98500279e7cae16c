"""
The byte-stream capability the HTTP layer is written against.

write_request() and read_response() only ever call these four methods,
so anything that provides them can carry an exchange:

    SocketStream (plain TCP)      ┐
    SocketStream (TLS-wrapped)    ├──► ByteStream ──► write_request / read_response
    io.BytesIO (tests, replay)    ┘

read() must return b"" at end of input. Errors are signalled by raising
OSError (socket.timeout and ssl.SSLError are both OSError subclasses).
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ByteStream(Protocol):
    """Readable and writable byte channel."""

    def write(self, data: bytes) -> Optional[int]:
        ...

    def flush(self) -> None:
        ...

    def read(self, size: int = -1) -> bytes:
        ...

    def close(self) -> None:
        ...
