"""
=============================================================================
URL PARSER
=============================================================================

Turns a raw URL string into a structured Url value.

=============================================================================
URL ANATOMY
=============================================================================

    https://example.com:8443/api/users?page=1
    ──┬──   ─────┬───── ──┬─ ──────────┬─────
      │          │        │            │
   protocol     host     port         path
                                  (query stays in the path)

    ┌──────────────────────────────────────────────────────────────────┐
    │  THREE PASSES, each splitting on the FIRST delimiter             │
    ├──────────────────────────────────────────────────────────────────┤
    │                                                                  │
    │  1. "://"  →  protocol | rest          (no "://" → "http")       │
    │  2. "/"    →  full_domain | path       (no "/"   → path "/")     │
    │  3. ":"    →  host | port              (no ":"   → by scheme)    │
    │                                                                  │
    └──────────────────────────────────────────────────────────────────┘

Default ports:

    http   → "80"
    https  → "443"
    other  → ""  (unset; the transport refuses to connect)

Parsing never fails. An empty string produces a Url with an empty host,
and it is the transport that rejects it with ParseError.

IPv6 literals ("http://[::1]:8080/") are NOT special-cased: the first
colon wins, so the host comes out as "[".

=============================================================================
"""

from dataclasses import dataclass
from typing import Union


SCHEME_SEPARATOR = "://"

DEFAULT_PROTOCOL = "http"

DEFAULT_PORTS = {
    "http": "80",
    "https": "443",
}


@dataclass(frozen=True)
class Url:
    """
    A parsed URL.

    Frozen so a Url can be shared between a Request and the transport
    without either one changing it. Use dataclasses.replace() to derive
    a modified copy.
    """

    protocol: str
    host: str
    port: str
    path: str
    absolute: str = ""

    @classmethod
    def parse(cls, raw: str) -> "Url":
        """Parse a raw URL string. Same as parse_url()."""
        return parse_url(raw)

    @property
    def host_with_port(self) -> str:
        """The "host:port" address used to open a connection."""
        return f"{self.host}:{self.port}"

    @property
    def full_url(self) -> str:
        """The string this Url was parsed from."""
        return self.absolute

    @property
    def is_https(self) -> bool:
        return self.protocol == "https"

    def __str__(self) -> str:
        return (
            f"url: {self.absolute},\n"
            f"proto: {self.protocol},\n"
            f"host: {self.host},\n"
            f"port: {self.port},\n"
            f"path: {self.path}\n"
        )


def split_protocol(raw: str) -> tuple[str, str]:
    """Split "scheme://rest" into (scheme, rest), defaulting to http."""
    protocol, separator, rest = raw.partition(SCHEME_SEPARATOR)
    if not separator:
        return DEFAULT_PROTOCOL, raw
    return protocol, rest


def split_full_domain(rest: str) -> tuple[str, str]:
    """Split "host:port/path" into ("host:port", "/path")."""
    index = rest.find("/")
    if index == -1:
        return rest, "/"
    return rest[:index], rest[index:]


def split_host_and_port(full_domain: str, protocol: str) -> tuple[str, str]:
    """Split "host:port" into (host, port), defaulting the port by scheme."""
    host, separator, port = full_domain.partition(":")
    if not separator:
        return host, DEFAULT_PORTS.get(protocol, "")
    return host, port


def parse_url(raw: str) -> Url:
    """
    Parse a raw URL string into a Url.

    Args:
        raw: Absolute ("https://host/path") or scheme-less ("host/path")
             URL string.

    Returns:
        The parsed Url. Never raises.

    Example:
        >>> url = parse_url("http://h:81/x/y")
        >>> url.host, url.port, url.path
        ('h', '81', '/x/y')
    """
    protocol, rest = split_protocol(raw)
    full_domain, path = split_full_domain(rest)
    host, port = split_host_and_port(full_domain, protocol)

    return Url(
        protocol=protocol,
        host=host,
        port=port,
        path=path,
        absolute=raw,
    )


def to_url(value: Union[str, Url]) -> Url:
    """
    Coerce a string or Url into a Url.

    Everything in the client that takes a URL accepts either form.
    """
    if isinstance(value, Url):
        return value
    if isinstance(value, str):
        return parse_url(value)
    raise TypeError(f"Cannot build a Url from {type(value).__name__}")
