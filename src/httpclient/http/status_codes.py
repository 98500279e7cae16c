"""
=============================================================================
HTTP STATUS CODE CLASSIFICATION
=============================================================================

The client does not keep a table of every status code. It classifies the
number from the status line into one of five wire categories, plus two
sentinels that never appear on the wire.

=============================================================================
STATUS CODE CATEGORIES
=============================================================================

    ┌────────────────┬──────────┬────────────────────────────────────────┐
    │  Kind          │  Range   │ Meaning                                │
    ├────────────────┼──────────┼────────────────────────────────────────┤
    │  INFORMATIONAL │ 100-199  │ Request received, continuing           │
    │  SUCCESS       │ 200-299  │ Request received, understood, accepted │
    │  REDIRECTION   │ 300-399  │ Further action needed                  │
    │  CLIENT_ERROR  │ 400-499  │ Problem with the request               │
    │  SERVER_ERROR  │ 500-599  │ Server failed a valid request          │
    ├────────────────┼──────────┼────────────────────────────────────────┤
    │  IGNORE        │    -     │ No response (built by hand)            │
    │  FAILURE       │    -     │ Status line could not be understood    │
    └────────────────┴──────────┴────────────────────────────────────────┘

IGNORE and FAILURE are internal values. They carry no number, and
`StatusCode.code` returns None for them. A test expecting "some HTTP
status" must not treat them as one.

=============================================================================
CLASSIFICATION RULES
=============================================================================

    token.strip()
        │
        ├── not exactly 3 ASCII digits ──────────► FAILURE
        │     "99", "1000", "abc", "2x0"
        │
        └── int(token)
              ├── 100..599 ──► category by hundreds
              └── otherwise ─► FAILURE   ("000", "600", "999")

=============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import re


class StatusKind(Enum):
    INFORMATIONAL = "Informational"
    SUCCESS = "Success"
    REDIRECTION = "Redirection"
    CLIENT_ERROR = "ClientError"
    SERVER_ERROR = "ServerError"
    IGNORE = "Ignore"
    FAILURE = "Failure"


# Hundreds digit → category
_KIND_BY_CLASS = {
    1: StatusKind.INFORMATIONAL,
    2: StatusKind.SUCCESS,
    3: StatusKind.REDIRECTION,
    4: StatusKind.CLIENT_ERROR,
    5: StatusKind.SERVER_ERROR,
}

_SENTINELS = (StatusKind.IGNORE, StatusKind.FAILURE)

STATUS_CODE_PATTERN = re.compile(r"^[0-9]{3}$")


@dataclass(frozen=True)
class StatusCode:
    """
    A classified status code.

    Wire categories hold the numeric value; sentinels hold None.

        >>> StatusCode.from_code("404")
        StatusCode(kind=<StatusKind.CLIENT_ERROR: 'ClientError'>, value=404)
        >>> StatusCode.from_code("404").code
        404
        >>> StatusCode.failure().code is None
        True
    """

    kind: StatusKind
    value: Optional[int] = None

    def __post_init__(self):
        if self.kind in _SENTINELS and self.value is not None:
            raise ValueError(f"{self.kind.value} carries no status number")
        if self.kind not in _SENTINELS and self.value is None:
            raise ValueError(f"{self.kind.value} requires a status number")

    @classmethod
    def from_code(cls, token: str) -> "StatusCode":
        """
        Classify the code token from a status line.

        Never raises: anything that is not a 3-digit code in 100-599
        becomes FAILURE.
        """
        token = token.strip()
        if not STATUS_CODE_PATTERN.match(token):
            return cls.failure()
        return cls.from_int(int(token))

    @classmethod
    def from_int(cls, number: int) -> "StatusCode":
        kind = _KIND_BY_CLASS.get(number // 100) if 100 <= number <= 599 else None
        if kind is None:
            return cls.failure()
        return cls(kind, number)

    @classmethod
    def failure(cls) -> "StatusCode":
        return cls(StatusKind.FAILURE)

    @classmethod
    def ignore(cls) -> "StatusCode":
        return cls(StatusKind.IGNORE)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def code(self) -> Optional[int]:
        """The numeric status code, or None for IGNORE / FAILURE."""
        return self.value

    @property
    def is_sentinel(self) -> bool:
        """True for the internal IGNORE and FAILURE values."""
        return self.kind in _SENTINELS

    @property
    def is_informational(self) -> bool:
        return self.kind is StatusKind.INFORMATIONAL

    @property
    def is_success(self) -> bool:
        return self.kind is StatusKind.SUCCESS

    @property
    def is_redirect(self) -> bool:
        return self.kind is StatusKind.REDIRECTION

    @property
    def is_client_error(self) -> bool:
        return self.kind is StatusKind.CLIENT_ERROR

    @property
    def is_server_error(self) -> bool:
        return self.kind is StatusKind.SERVER_ERROR

    @property
    def is_error(self) -> bool:
        """4xx or 5xx. Sentinels are not errors in the HTTP sense."""
        return self.is_client_error or self.is_server_error

    def __str__(self) -> str:
        if self.value is None:
            return "HTTP Response Code: ERROR!"
        return f"HTTP Response Code: {self.value}"


@dataclass(frozen=True)
class ResponseStatus:
    """Status code plus the optional reason phrase from the status line."""

    code: StatusCode
    reason: Optional[str] = None

    def __str__(self) -> str:
        if self.reason is not None:
            return f"{self.code} - {self.reason}"
        return str(self.code)
