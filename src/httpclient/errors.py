"""
=============================================================================
CLIENT ERRORS
=============================================================================

Every failure the client can surface is a ClientError carrying an
ErrorKind. Callers can catch the base class, a specific subclass, or
branch on `error.kind`.

    ┌──────────────────┬────────────────────────────────────────────────┐
    │  Kind            │ Raised when                                    │
    ├──────────────────┼────────────────────────────────────────────────┤
    │  PARSE_ERROR     │ URL unusable by the transport (empty host,     │
    │                  │ missing or non-numeric port)                   │
    │  NETWORK_ERROR   │ Connect, write or read on the stream failed    │
    │  HTTP_METHOD_ERR │ Custom method token is not a valid token       │
    │  HTTPS_SSL_ERROR │ TLS handshake / certificate failure            │
    │  DEFAULT         │ Anything else                                  │
    └──────────────────┴────────────────────────────────────────────────┘

The response parser never raises. A malformed status line becomes the
FAILURE status sentinel instead (see status_codes.py).

=============================================================================
"""

from enum import Enum


class ErrorKind(Enum):
    """Category of a ClientError."""

    DEFAULT = "Default"
    PARSE_ERROR = "ParseError"
    NETWORK_ERROR = "NetworkError"
    HTTP_METHOD_ERROR = "HttpMethodError"
    HTTPS_SSL_ERROR = "HttpsSslError"


class ClientError(Exception):
    """
    Base exception for the HTTP client.

    Like HTTPParseError on the server side, the exception carries
    metadata (here the ErrorKind) so callers don't have to parse
    messages to decide what happened.
    """

    kind = ErrorKind.DEFAULT

    def __init__(self, message: str = "", kind: ErrorKind = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        if self.message:
            return f"httpclient Error - {self.kind.value}: {self.message}"
        return f"httpclient Error - {self.kind.value}"


class ParseError(ClientError):
    """The URL cannot be used to open a connection."""

    kind = ErrorKind.PARSE_ERROR


class NetworkError(ClientError):
    """Stream I/O failed during connect, write or read."""

    kind = ErrorKind.NETWORK_ERROR


class HttpMethodError(ClientError):
    """A custom request method is not a valid HTTP token."""

    kind = ErrorKind.HTTP_METHOD_ERROR


class HttpsSslError(ClientError):
    """The secure transport could not be established."""

    kind = ErrorKind.HTTPS_SSL_ERROR
