"""
=============================================================================
ACCESS LOGGING
=============================================================================

One structured log record per request/response exchange, emitted on the
"httpclient.access" logger.

    text:  a1b2c3d4 GET http://example.com/ 200 1256 12.40ms
    json:  {"request_id": "a1b2c3d4", "method": "GET", ...}

Configure it like any other logger:

    logging.getLogger("httpclient.access").setLevel(logging.WARNING)

=============================================================================
"""

import json
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Optional

from .http.request import Request
from .http.response import Response


logger = logging.getLogger("httpclient.access")


def new_request_id() -> str:
    """Short random id used to correlate log lines of one exchange."""
    return str(uuid.uuid4())[:8]


@dataclass
class ExchangeLog:
    """
    Structured log entry for one exchange.

    status_code is None when the status line could not be classified,
    and "-" in the text format.
    """

    request_id: str
    method: str
    url: str
    status_code: Optional[int]
    content_length: int
    duration_ms: float
    timestamp: str

    @classmethod
    def build(
        cls,
        request_id: str,
        request: Request,
        response: Response,
        duration_ms: float,
    ) -> "ExchangeLog":
        return cls(
            request_id=request_id,
            method=request.method_name,
            url=request.url.full_url,
            status_code=response.status_code,
            content_length=len(response.body),
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "method": self.method,
            "url": self.url,
            "status_code": self.status_code,
            "content_length": self.content_length,
            "duration_ms": round(self.duration_ms, 2),
            "timestamp": self.timestamp,
        }

    def to_text(self) -> str:
        status = "-" if self.status_code is None else self.status_code
        return (
            f"{self.request_id} {self.method} {self.url} {status} "
            f"{self.content_length} {self.duration_ms:.2f}ms"
        )


def log_exchange(
    request_id: str,
    request: Request,
    response: Response,
    duration_ms: float,
    log_format: str = "text",
    level: int = logging.INFO,
) -> ExchangeLog:
    """Emit the access record for a completed exchange."""
    entry = ExchangeLog.build(request_id, request, response, duration_ms)
    if log_format == "json":
        logger.log(level, json.dumps(entry.to_dict()))
    else:
        logger.log(level, entry.to_text())
    return entry


def log_failure(
    request_id: str,
    request: Request,
    error: Exception,
    duration_ms: float,
) -> None:
    """Emit the access record for an exchange that raised."""
    logger.error(
        f"{request_id} Request failed: {request.method_name} {request.url.full_url} "
        f"- {type(error).__name__}: {error} ({duration_ms:.2f}ms)"
    )
