"""
Integration tests: real sockets against a local one-shot server.
"""

import asyncio

import pytest

from httpclient import ClientConfig, Request, RequestMethod, get, get_http, get_https
from httpclient.client import execute
from httpclient.core import async_execute, async_get, open_stream
from httpclient.core.connection import StreamState
from httpclient.errors import HttpsSslError, NetworkError, ParseError
from httpclient.http.url import parse_url

from conftest import LoopbackServer, SilentServer


class TestSocketTransport:
    """Tests for the plain TCP path."""

    def test_execute_round_trip(self, loopback_server: LoopbackServer, config: ClientConfig):
        """Test a full exchange over a real socket."""
        request = Request.default_get_request(f"http://127.0.0.1:{loopback_server.port}/foo")

        response = execute(request, config)

        assert response.status_code == 200
        assert response.headers["x"] == "1"
        assert response.body == "body"

        sent = loopback_server.requests[0]
        assert sent.startswith(b"GET /foo HTTP/1.1\r\n")
        assert b"connection: close\r\n" in sent
        assert b"host: 127.0.0.1\r\n" in sent
        assert sent.endswith(b"\r\n\r\n")

    def test_post_body_arrives(self, loopback_server: LoopbackServer, config: ClientConfig):
        """Test that a POST body reaches the server."""
        request = Request.new(
            f"http://127.0.0.1:{loopback_server.port}/submit",
            headers=[("content-length", "7")],
            method=RequestMethod.POST,
            body="payload",
        )

        request.execute(config)

        assert loopback_server.requests[0].endswith(b"\r\n\r\npayload")

    def test_get_returns_body(self, loopback_server: LoopbackServer, config: ClientConfig):
        """Test get against a local server."""
        assert get(f"http://127.0.0.1:{loopback_server.port}/", config) == "body"

    def test_scheme_less_url(self, loopback_server: LoopbackServer, config: ClientConfig):
        """Test a URL without scheme."""
        assert get(f"127.0.0.1:{loopback_server.port}/", config) == "body"

    def test_get_http_ignores_https_scheme(self, loopback_server: LoopbackServer, config: ClientConfig):
        """Test that get_http stays plain for https URLs."""
        assert get_http(f"https://127.0.0.1:{loopback_server.port}/", config) == "body"

    def test_stream_counters_and_close(self, loopback_server: LoopbackServer, config: ClientConfig):
        """Test byte counters and state on a socket stream."""
        url = parse_url(f"http://127.0.0.1:{loopback_server.port}/")

        with open_stream(url, config) as stream:
            stream.write(Request.default_get_request(url).to_bytes())
            while stream.read(1024):
                pass
            assert stream.bytes_received > 0
            assert stream.is_secure is False

        assert stream.state is StreamState.CLOSED

    def test_connection_refused(self, closed_port: int, config: ClientConfig):
        """Test that a refused connection raises NetworkError."""
        with pytest.raises(NetworkError):
            get(f"http://127.0.0.1:{closed_port}/", config)

    def test_read_timeout(self, silent_server: SilentServer):
        """Test that a server that never answers ends in NetworkError."""
        request = Request.default_get_request(f"http://127.0.0.1:{silent_server.port}/")

        with pytest.raises(NetworkError):
            execute(request, ClientConfig(timeout=0.3))

    @pytest.mark.parametrize("url", ["http:///path", "http://h:abc/", "http://h:70000/"])
    def test_unusable_url(self, url: str, config: ClientConfig):
        """Test URLs that cannot be connected to."""
        with pytest.raises(ParseError):
            open_stream(parse_url(url), config)


class TestTlsTransport:
    """Tests for the TLS path against a server that does not speak TLS."""

    @pytest.fixture
    def plain_server(self, sample_response: bytes):
        server = LoopbackServer(sample_response, parse_request=False).start()
        yield server
        server.stop()

    def test_https_against_plain_server(self, plain_server: LoopbackServer, config: ClientConfig):
        """Test that a failed handshake raises HttpsSslError."""
        with pytest.raises(HttpsSslError):
            get(f"https://127.0.0.1:{plain_server.port}/", config)

    def test_get_https_forces_tls(self, plain_server: LoopbackServer, config: ClientConfig):
        """Test that get_https uses TLS for http URLs."""
        with pytest.raises(HttpsSslError):
            get_https(f"http://127.0.0.1:{plain_server.port}/", config)


class TestAsyncTransport:
    """Tests for the asyncio variant."""

    def test_async_execute(self, loopback_server: LoopbackServer, config: ClientConfig):
        """Test a full exchange with asyncio streams."""
        request = Request.default_get_request(f"http://127.0.0.1:{loopback_server.port}/async")

        response = asyncio.run(async_execute(request, config))

        assert response.status_code == 200
        assert response.body == "body"
        assert loopback_server.requests[0].startswith(b"GET /async HTTP/1.1\r\n")

    def test_async_get(self, loopback_server: LoopbackServer, config: ClientConfig):
        """Test async_get against a local server."""
        body = asyncio.run(async_get(f"http://127.0.0.1:{loopback_server.port}/", config))
        assert body == "body"

    def test_async_connection_refused(self, closed_port: int, config: ClientConfig):
        """Test that a refused async connection raises NetworkError."""
        with pytest.raises(NetworkError):
            asyncio.run(async_get(f"http://127.0.0.1:{closed_port}/", config))

    def test_async_timeout(self, silent_server: SilentServer):
        """Test that the async exchange is bounded by the configured timeout."""
        with pytest.raises(NetworkError) as exc_info:
            asyncio.run(async_get(f"http://127.0.0.1:{silent_server.port}/", ClientConfig(timeout=0.3)))

        assert "Timed out" in str(exc_info.value)

    def test_async_empty_host(self, config: ClientConfig):
        """Test that an empty host fails in the async variant."""
        with pytest.raises(ParseError):
            asyncio.run(async_get("", config))
