"""
=============================================================================
HTTP RESPONSE PARSER
=============================================================================

Reads a raw HTTP/1.1 response from a byte stream and decomposes it into
status, headers and body.

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                     │
    │  HTTP/1.1 404 Not Found\r\n              ← status line              │
    │  ───┬──── ─┬─ ────┬────                                             │
    │     │      │      └── reason phrase (optional)                      │
    │     │      └───────── status code (3 digits)                        │
    │     └──────────────── version (ignored)                             │
    │                                                                     │
    │  Content-Type: text/html\r\n             ← header lines             │
    │  Server: nginx\r\n                                                  │
    │  \r\n                                    ← FIRST \r\n\r\n ends head │
    │  <html>...</html>                        ← body, kept verbatim      │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
READING STRATEGY
=============================================================================

The whole stream is read until EOF. Content-Length is not consulted.

This only works because every request carries `connection: close`: the
server closes the socket when the message is complete. With keep-alive
the read would block until the server's idle timeout.

=============================================================================
LENIENCY
=============================================================================

The parser never raises:

- Invalid UTF-8 is decoded with replacement characters.
- A status line it cannot classify yields the FAILURE status sentinel.
- Header lines without ":" are skipped.

Only the transport can fail (NetworkError from read_response).

=============================================================================
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterator, Mapping, Optional, Union
import logging

from ..errors import NetworkError
from .headers import HeaderMap
from .status_codes import ResponseStatus, StatusCode

if TYPE_CHECKING:
    from ..core.stream import ByteStream


logger = logging.getLogger(__name__)

HEAD_SEPARATOR = "\r\n\r\n"
LINE_SEPARATOR = "\r\n"

DEFAULT_BUFFER_SIZE = 8192


@dataclass(frozen=True)
class Response:
    """
    A parsed HTTP response.

    Attributes:
        status:  Classified status code and reason phrase.
        headers: Read-only header mapping, or None when the response had
                 no lines after the status line.
        body:    Everything after the first blank line.

    Check `status.code.kind` for the FAILURE / IGNORE sentinels before
    trusting `status_code`.
    """

    status: ResponseStatus
    headers: Optional[Mapping[str, str]]
    body: str

    def __post_init__(self):
        if self.headers is not None and not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def __hash__(self) -> int:
        headers = None if self.headers is None else tuple(self.headers.items())
        return hash((self.status, headers, self.body))

    @classmethod
    def ignored(cls) -> "Response":
        """A placeholder response that never came off the wire."""
        return cls(status=ResponseStatus(StatusCode.ignore()), headers=None, body="")

    @property
    def status_code(self) -> Optional[int]:
        """The numeric status code, or None for sentinels."""
        return self.status.code.code

    @property
    def reason(self) -> Optional[str]:
        return self.status.reason

    @property
    def ok(self) -> bool:
        return self.status.code.is_success

    def get_response_headers(self) -> Optional[Iterator[tuple[str, str]]]:
        """Iterate over (name, value) pairs, or None without headers."""
        if self.headers is None:
            return None
        return iter(self.headers.items())

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Exact-match header lookup."""
        if self.headers is None:
            return default
        return self.headers.get(name, default)


class ResponseParser:
    """
    Parses raw response bytes into Response objects.

    Stateless: parsing the same bytes twice yields equal Responses.

        Raw bytes
            │  decode utf-8 (errors="replace")
            ▼
        split on FIRST "\\r\\n\\r\\n" ─────────► body
            │
            ▼
        head.split("\\r\\n")
            ├── line 0 ──► _parse_status_line ──► ResponseStatus
            └── lines 1: ► _parse_headers ─────► HeaderMap | None
    """

    def parse(self, data: Union[bytes, str]) -> Response:
        """
        Parse a complete response.

        Args:
            data: Everything read from the stream up to EOF.

        Returns:
            Parsed Response. Never raises.
        """
        if isinstance(data, (bytes, bytearray)):
            text = bytes(data).decode("utf-8", errors="replace")
        else:
            text = data

        # Only the first separator counts; the body may contain more.
        head, separator, body = text.partition(HEAD_SEPARATOR)
        if not separator:
            # No blank line: there is nothing to tell head from body,
            # so both see the whole text.
            body = text

        lines = head.split(LINE_SEPARATOR)
        status = self._parse_status_line(lines[0])
        headers = self._parse_headers(lines[1:])

        return Response(status=status, headers=headers, body=body)

    def _parse_status_line(self, line: str) -> ResponseStatus:
        """
        Parse "{version} {code} {reason}" into a ResponseStatus.

        The version is ignored. The reason is everything after the second
        space, so "HTTP/1.1 404 Not Found" keeps "Not Found" whole.
        """
        parts = line.split(" ", 2)
        if len(parts) < 2:
            logger.debug(f"Unrecognized status line: {line!r}")
            return ResponseStatus(StatusCode.failure())

        code = StatusCode.from_code(parts[1])
        reason = parts[2] if len(parts) > 2 else None

        if code.is_sentinel:
            logger.debug(f"Unrecognized status code in status line: {line!r}")

        return ResponseStatus(code, reason)

    def _parse_headers(self, lines: list[str]) -> Optional[HeaderMap]:
        """
        Parse header lines.

        Name is kept verbatim (no trimming, no case folding); value is
        stripped. Lines without a colon are skipped. Duplicate names:
        the last one wins.
        """
        if not lines:
            return None

        headers = HeaderMap()
        for line in lines:
            name, separator, value = line.partition(":")
            if not separator:
                continue
            headers[name] = value.strip()
        return headers


def read_response(stream: "ByteStream", buffer_size: int = DEFAULT_BUFFER_SIZE) -> bytes:
    """
    Read `stream` until EOF.

    Raises:
        NetworkError: If the stream raises OSError while reading.
    """
    chunks = []
    try:
        while True:
            chunk = stream.read(buffer_size)
            if not chunk:
                break
            chunks.append(chunk)
    except OSError as e:
        raise NetworkError(f"Failed to read response: {e}") from e
    return b"".join(chunks)


def parse_response(data: Union[bytes, str]) -> Response:
    """Convenience function: ResponseParser().parse(data)."""
    return ResponseParser().parse(data)
