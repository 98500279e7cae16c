"""
=============================================================================
HTTP REQUEST BUILDER
=============================================================================

Builds Request objects and serializes them onto a byte stream.

=============================================================================
WIRE FORMAT PRODUCED
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                     │
    │   GET /api/users HTTP/1.1\r\n          ← request line               │
    │   user-agent: mini-get/0.1.0\r\n       ┐                            │
    │   accept: */*\r\n                      │ headers                    │
    │   host: example.com\r\n                │ (mapping order)            │
    │   connection: close\r\n                ┘                            │
    │   \r\n                                 ← end of header block        │
    │   [body]                               ← only if a body is set      │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

NOT done here:
- No Content-Length is added for a body. Callers sending a body add it
  themselves with add_header().
- No chunked encoding, no Expect: 100-continue, no pipelining.

=============================================================================
REQUEST METHODS
=============================================================================

    ┌──────────┬──────────────────────────────────────────────────────────┐
    │  Method  │ Notes                                                    │
    ├──────────┼──────────────────────────────────────────────────────────┤
    │  GET     │ Default for every request                                │
    │  HEAD    │ GET without body (the server still closes the socket)    │
    │  POST    │ Body is written verbatim                                 │
    │  PUT     │ Body is written verbatim                                 │
    │  DELETE  │                                                          │
    │  OPTIONS │                                                          │
    │  <other> │ Any valid token as a plain string, e.g. "PATCH"          │
    └──────────┴──────────────────────────────────────────────────────────┘

=============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Union
import re

from ..errors import HttpMethodError, NetworkError
from .headers import DEFAULT_USER_AGENT, HeaderMap, default_headers
from .url import Url, to_url

if TYPE_CHECKING:
    from ..config import ClientConfig
    from ..core.stream import ByteStream
    from .response import Response


class RequestMethod(str, Enum):
    """The request methods the client knows by name."""

    HEAD = "HEAD"
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"


# A custom method must be an RFC 7230 token: visible characters,
# no whitespace or separators. Anything else would break the request line.
METHOD_TOKEN_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

Method = Union[RequestMethod, str]


def resolve_method(method: Method) -> Method:
    """
    Normalize a method to a RequestMethod member when it names one.

    Unknown names are kept verbatim as custom methods.

    Raises:
        HttpMethodError: If a custom method is not a valid token.
    """
    if isinstance(method, RequestMethod):
        return method
    try:
        return RequestMethod(method)
    except ValueError:
        pass
    if not isinstance(method, str) or not METHOD_TOKEN_PATTERN.match(method):
        raise HttpMethodError(f"Invalid method: {method!r}")
    return method


def format_method(method: Method) -> str:
    """The method as it appears on the request line."""
    if isinstance(method, RequestMethod):
        return method.value
    return method


@dataclass
class Request:
    """
    An HTTP request ready to be written to a stream.

    Attributes:
        url:     Target URL. The request line uses url.path.
        method:  RequestMethod member or custom token string.
        headers: Header map. Defaults to default_headers(url).
        body:    Optional body, written as UTF-8 after the header block.

    Example:
        request = Request.new("http://example.com/foo")
        request.add_header("accept", "text/plain")
        response = request.execute()
    """

    url: Url
    method: Method = RequestMethod.GET
    headers: Optional[HeaderMap] = None
    body: Optional[str] = None

    def __post_init__(self):
        self.url = to_url(self.url)
        self.method = resolve_method(self.method)
        if self.headers is None:
            self.headers = default_headers(self.url)
        elif not isinstance(self.headers, HeaderMap):
            self.headers = HeaderMap(self.headers)

    # =========================================================================
    # CONSTRUCTORS
    # =========================================================================

    @classmethod
    def new(
        cls,
        url: Union[str, Url],
        headers: Optional[Iterable[tuple[str, str]]] = None,
        method: Method = RequestMethod.GET,
        body: Optional[str] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> "Request":
        """
        Build a request with the default headers plus `headers`.

        Extra headers are merged over the defaults, so passing
        ("accept", "text/plain") replaces the default "*/*".
        """
        url = to_url(url)
        merged = default_headers(url, user_agent)
        for key, value in headers or ():
            merged.add_header(key, value)
        return cls(url=url, method=method, headers=merged, body=body)

    @classmethod
    def default_get_request(
        cls,
        url: Union[str, Url],
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> "Request":
        """A GET request with only the default headers."""
        url = to_url(url)
        return cls(url=url, headers=default_headers(url, user_agent))

    # =========================================================================
    # MUTATORS (before execution)
    # =========================================================================

    def add_header(self, key: str, value: str) -> "Request":
        """Insert or overwrite a header. Returns self for chaining."""
        self.headers.add_header(key, value)
        return self

    def set_method(self, method: Method) -> "Request":
        self.method = resolve_method(method)
        return self

    def set_body(self, body: Optional[str]) -> "Request":
        self.body = body
        return self

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def method_name(self) -> str:
        return format_method(self.method)

    @property
    def is_https(self) -> bool:
        return self.url.is_https

    def get_headers(self) -> Iterator[tuple[str, str]]:
        """Iterate over (name, value) header pairs."""
        return self.headers.pairs()

    @property
    def request_line(self) -> str:
        """The first line of the request, without CRLF."""
        return f"{self.method_name} {self.url.path} HTTP/1.1"

    def to_bytes(self) -> bytes:
        """Serialize the whole request into memory."""
        buffer = BytesIO()
        write_request(buffer, self)
        return buffer.getvalue()

    def execute(self, config: Optional["ClientConfig"] = None) -> "Response":
        """
        Send this request and return the parsed response.

        Opens a plain or TLS connection depending on url.protocol.
        See httpclient.client.execute.
        """
        from ..client import execute
        return execute(self, config=config)


def write_request(stream: "ByteStream", request: Request) -> None:
    """
    Serialize `request` onto `stream`.

    =====================================================================
    WRITE ORDER
    =====================================================================

    1. Request line   "{METHOD} {path} HTTP/1.1\\r\\n"
    2. Each header    "{key}: {value}\\r\\n"
    3. Blank line     "\\r\\n"
    4. Body bytes     (only when request.body is not None)

    The first failing write aborts the whole operation. Bytes already
    written stay written; nothing is retried.

    =====================================================================

    Raises:
        NetworkError: If the stream raises OSError on any write.
    """
    try:
        stream.write(f"{request.request_line}\r\n".encode("utf-8"))
        for key, value in request.get_headers():
            stream.write(f"{key}: {value}\r\n".encode("utf-8"))
        stream.write(b"\r\n")
        if request.body is not None:
            stream.write(request.body.encode("utf-8"))
    except OSError as e:
        raise NetworkError(f"Failed to write request: {e}") from e
