"""
HTTP header map and the default request headers.

Every request starts with the same four headers:

    user-agent: mini-get/0.1.0
    accept: */*
    host: <url.host>
    connection: close

`connection: close` matters: the response is read until the server
closes the socket, so the server must be told to close it.

Header names are stored exactly as inserted and compared by exact string
match. "Accept" and "accept" are two different keys here.
"""

from typing import Iterator

from .url import Url


DEFAULT_USER_AGENT = "mini-get/0.1.0"


class HeaderMap(dict):
    """
    Mapping of header name to header value.

    A plain dict with an explicit insert-or-overwrite operation. The
    client API has no remove operation.
    """

    def add_header(self, key: str, value: str) -> "HeaderMap":
        """Insert or overwrite a header. Returns self for chaining."""
        self[key] = value
        return self

    def pairs(self) -> Iterator[tuple[str, str]]:
        """Iterate over (name, value) pairs."""
        return iter(self.items())


def default_headers(url: Url, user_agent: str = DEFAULT_USER_AGENT) -> HeaderMap:
    """Build the default header set for a request to `url`."""
    return HeaderMap({
        "user-agent": user_agent,
        "accept": "*/*",
        "host": url.host,
        "connection": "close",
    })


def add_header(headers: HeaderMap, key: str, value: str) -> HeaderMap:
    """Insert or overwrite `key` in `headers`; last write wins."""
    return headers.add_header(key, value)
