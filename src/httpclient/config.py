"""
=============================================================================
CLIENT CONFIGURATION
=============================================================================

Centralized configuration for the HTTP client.

Every setting has a working default, so `ClientConfig()` is enough for
most callers. The CLI builds one from its arguments; services can build
one from the environment with `ClientConfig.from_env()`.

=============================================================================
ENVIRONMENT VARIABLES
=============================================================================

    HTTP_CLIENT_TIMEOUT      Socket timeout in seconds, "none" to block
    HTTP_CLIENT_USER_AGENT   Value of the user-agent header
    HTTP_CLIENT_VERIFY_TLS   "0"/"false"/"no" disables verification
    HTTP_CLIENT_LOG_LEVEL    DEBUG, INFO, WARNING, ERROR
    HTTP_CLIENT_LOG_FORMAT   text or json

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .http.headers import DEFAULT_USER_AGENT


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class ClientConfig:
    """
    Configuration for the HTTP client.

    The parser itself has no timeout. A hung server blocks a read
    forever unless the transport sets one, so `timeout` is applied to
    the socket before any bytes reach the parser.
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    timeout: Optional[float] = 30.0
    """
    Socket timeout in seconds for connect and each read/write.
    None = blocking (a silent server hangs the call).
    """

    buffer_size: int = 8192
    """Bytes requested per read while draining the response."""

    verify_tls: bool = True
    """
    Verify the server certificate and hostname for https.
    Only disable against test servers with self-signed certificates.
    """

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST DEFAULTS
    # ─────────────────────────────────────────────────────────────────────

    user_agent: str = DEFAULT_USER_AGENT
    """Value of the default user-agent header."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Level for the httpclient loggers."""

    log_format: str = "text"
    """Access log format: 'text' or 'json'."""

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Create configuration from environment variables.

        Usage:
            HTTP_CLIENT_TIMEOUT=5 HTTP_CLIENT_LOG_LEVEL=DEBUG python -m httpclient http://example.com
        """
        timeout = os.getenv("HTTP_CLIENT_TIMEOUT", "30")
        return cls(
            timeout=None if timeout.lower() == "none" else float(timeout),
            user_agent=os.getenv("HTTP_CLIENT_USER_AGENT", DEFAULT_USER_AGENT),
            verify_tls=os.getenv("HTTP_CLIENT_VERIFY_TLS", "1").lower() not in _FALSE_VALUES,
            log_level=os.getenv("HTTP_CLIENT_LOG_LEVEL", "INFO"),
            log_format=os.getenv("HTTP_CLIENT_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On the first invalid setting.
        """
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0 or None")

        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        if not self.user_agent:
            raise ValueError("user_agent must not be empty")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"Invalid log_format: {self.log_format}. Must be 'text' or 'json'.")


def configure_logging(config: ClientConfig) -> None:
    """
    Configure logging for command-line use.

    Libraries should not touch the root logger; only the CLI calls this.
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("httpclient").setLevel(level)
