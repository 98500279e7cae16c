"""
Unit tests for configuration and errors.
"""

import pytest

from httpclient.config import ClientConfig
from httpclient.errors import (
    ClientError,
    ErrorKind,
    HttpMethodError,
    HttpsSslError,
    NetworkError,
    ParseError,
)
from httpclient.http.headers import DEFAULT_USER_AGENT


class TestClientConfig:
    """Tests for ClientConfig."""

    def test_defaults_are_valid(self):
        """Test the default configuration."""
        config = ClientConfig()
        config.validate()

        assert config.timeout == 30.0
        assert config.user_agent == DEFAULT_USER_AGENT
        assert config.verify_tls is True

    @pytest.mark.parametrize("kwargs", [
        {"timeout": 0},
        {"timeout": -1.0},
        {"buffer_size": 0},
        {"user_agent": ""},
        {"log_level": "LOUD"},
        {"log_format": "xml"},
    ])
    def test_validate_rejects(self, kwargs: dict):
        """Test rejection of invalid settings."""
        with pytest.raises(ValueError):
            ClientConfig(**kwargs).validate()

    def test_timeout_none_is_valid(self):
        """Test that a blocking timeout is allowed."""
        ClientConfig(timeout=None).validate()

    def test_from_env(self, monkeypatch):
        """Test reading configuration from the environment."""
        monkeypatch.setenv("HTTP_CLIENT_TIMEOUT", "2.5")
        monkeypatch.setenv("HTTP_CLIENT_USER_AGENT", "env-agent/1.0")
        monkeypatch.setenv("HTTP_CLIENT_VERIFY_TLS", "false")
        monkeypatch.setenv("HTTP_CLIENT_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("HTTP_CLIENT_LOG_FORMAT", "json")

        config = ClientConfig.from_env()

        assert config.timeout == 2.5
        assert config.user_agent == "env-agent/1.0"
        assert config.verify_tls is False
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_from_env_defaults(self, monkeypatch):
        """Test environment defaults."""
        for name in ("HTTP_CLIENT_TIMEOUT", "HTTP_CLIENT_USER_AGENT", "HTTP_CLIENT_VERIFY_TLS"):
            monkeypatch.delenv(name, raising=False)

        config = ClientConfig.from_env()

        assert config.timeout == 30.0
        assert config.verify_tls is True

    def test_from_env_blocking_timeout(self, monkeypatch):
        """Test HTTP_CLIENT_TIMEOUT=none."""
        monkeypatch.setenv("HTTP_CLIENT_TIMEOUT", "none")
        assert ClientConfig.from_env().timeout is None


class TestErrors:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize("cls,kind", [
        (ParseError, ErrorKind.PARSE_ERROR),
        (NetworkError, ErrorKind.NETWORK_ERROR),
        (HttpMethodError, ErrorKind.HTTP_METHOD_ERROR),
        (HttpsSslError, ErrorKind.HTTPS_SSL_ERROR),
        (ClientError, ErrorKind.DEFAULT),
    ])
    def test_kind(self, cls, kind: ErrorKind):
        """Test the kind carried by each error class."""
        error = cls("boom")

        assert error.kind is kind
        assert isinstance(error, ClientError)

    def test_str(self):
        """Test error message formatting."""
        assert str(NetworkError("reset")) == "httpclient Error - NetworkError: reset"
        assert str(ClientError()) == "httpclient Error - Default"

    def test_explicit_kind(self):
        """Test overriding the error kind."""
        assert ClientError("x", kind=ErrorKind.PARSE_ERROR).kind is ErrorKind.PARSE_ERROR
