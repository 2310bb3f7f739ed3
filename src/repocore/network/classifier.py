"""Error classifier: maps transport errors onto exactly one Failure variant.

The mapping is total and deterministic:

* timeout kinds, connection errors, and cancellation win over any status code;
* otherwise the HTTP status decides (401/403/404/408/409/429, one variant per
  5xx code, 400 and every other 4xx as a client error);
* no status code, or a status outside the known set, is a server failure.

A JSON object body with a ``message`` (or ``error``) string replaces the
variant's default message.
"""

from __future__ import annotations

import traceback
from typing import Any

import httpx

from repocore.domain.failures import (
    BadGatewayFailure,
    CancelledFailure,
    ClientErrorFailure,
    ConflictFailure,
    Failure,
    FailureError,
    ForbiddenFailure,
    GatewayTimeoutFailure,
    GenericFailure,
    InternalServerErrorFailure,
    NetworkFailure,
    NoConnectionFailure,
    NotFoundFailure,
    NotImplementedFailure,
    RequestTimeoutFailure,
    ServerFailure,
    ServiceUnavailableFailure,
    TimeoutFailure,
    TooManyRequestsFailure,
    UnauthorizedFailure,
)
from repocore.network.errors import ErrorKind, TransportError
from repocore.network.httpx_errors import transport_error_from_httpx

STATUS_FAILURES: dict[int, type[NetworkFailure]] = {
    401: UnauthorizedFailure,
    403: ForbiddenFailure,
    404: NotFoundFailure,
    408: RequestTimeoutFailure,
    409: ConflictFailure,
    429: TooManyRequestsFailure,
    500: InternalServerErrorFailure,
    501: NotImplementedFailure,
    502: BadGatewayFailure,
    503: ServiceUnavailableFailure,
    504: GatewayTimeoutFailure,
}

_KIND_FAILURES = (TimeoutFailure, NoConnectionFailure, CancelledFailure)
_SERVER_MESSAGE_KEYS = ("message", "error")


def classify(error: TransportError, *, cause: BaseException | None = None) -> Failure:
    """Classify *error* into a concrete :class:`NetworkFailure` subtype.

    Args:
        error: The transport error description.
        cause: Exception to record on the failure; defaults to *error*.
    """
    failure_cls = failure_type_for(error.kind, error.status_code)
    fields: dict[str, Any] = {}
    if failure_cls not in _KIND_FAILURES and error.status_code is not None:
        fields["status_code"] = error.status_code

    server_message = extract_server_message(error.body)
    if server_message is not None:
        fields["message"] = server_message

    recorded = cause if cause is not None else error
    return failure_cls(cause=recorded, trace=format_trace(recorded), **fields)


def failure_type_for(kind: ErrorKind, status_code: int | None) -> type[NetworkFailure]:
    """Pick the failure variant for a kind/status pair."""
    if kind.is_timeout:
        return TimeoutFailure
    if kind is ErrorKind.CONNECTION_ERROR:
        return NoConnectionFailure
    if kind is ErrorKind.CANCELLED:
        return CancelledFailure
    if status_code is None:
        return ServerFailure
    mapped = STATUS_FAILURES.get(status_code)
    if mapped is not None:
        return mapped
    if 400 <= status_code < 500:
        return ClientErrorFailure
    return ServerFailure


def classify_exception(exc: BaseException) -> Failure:
    """Convert any exception escaping a data source into a Failure."""
    if isinstance(exc, FailureError):
        return exc.failure
    if isinstance(exc, TransportError):
        return classify(exc)
    if isinstance(exc, httpx.HTTPError):
        return classify(transport_error_from_httpx(exc), cause=exc)
    return GenericFailure(
        message=str(exc) or type(exc).__name__,
        cause=exc,
        trace=format_trace(exc),
    )


def extract_server_message(body: Any) -> str | None:
    """Return the server-supplied message from a structured body, if present."""
    if not isinstance(body, dict):
        return None
    for key in _SERVER_MESSAGE_KEYS:
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def format_trace(exc: BaseException) -> str | None:
    if exc.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(exc))
