"""Transport error description: the classifier's only input shape."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """What went wrong at the transport level."""

    CONNECT_TIMEOUT = "connect_timeout"
    SEND_TIMEOUT = "send_timeout"
    RECEIVE_TIMEOUT = "receive_timeout"
    CONNECTION_ERROR = "connection_error"
    CANCELLED = "cancelled"
    BAD_RESPONSE = "bad_response"
    BAD_CERTIFICATE = "bad_certificate"
    UNKNOWN = "unknown"

    @property
    def is_timeout(self) -> bool:
        return self in (ErrorKind.CONNECT_TIMEOUT, ErrorKind.SEND_TIMEOUT, ErrorKind.RECEIVE_TIMEOUT)


class TransportError(Exception):
    """Raised by remote data sources when a request fails.

    Args:
        kind: Transport-level classification of the failure.
        status_code: HTTP status, when a response was received.
        body: Decoded response body, if any.
        message: Transport-supplied description (not the server's).
    """

    def __init__(
        self,
        kind: ErrorKind,
        *,
        status_code: int | None = None,
        body: Any = None,
        message: str | None = None,
    ) -> None:
        super().__init__(message or f"{kind.value} (status={status_code})")
        self.kind = kind
        self.status_code = status_code
        self.body = body
        self.message = message
