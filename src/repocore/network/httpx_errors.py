"""Translate httpx exceptions into :class:`TransportError` descriptions."""

from __future__ import annotations

from typing import Any

import httpx

from repocore.network.errors import ErrorKind, TransportError


def transport_error_from_httpx(exc: httpx.HTTPError) -> TransportError:
    """Describe an httpx failure in transport terms.

    Order matters: httpx timeouts subclass ``TransportError`` and
    connection errors subclass ``NetworkError``.
    """
    if isinstance(exc, (httpx.ConnectTimeout, httpx.PoolTimeout)):
        kind = ErrorKind.CONNECT_TIMEOUT
    elif isinstance(exc, httpx.WriteTimeout):
        kind = ErrorKind.SEND_TIMEOUT
    elif isinstance(exc, (httpx.ReadTimeout, httpx.TimeoutException)):
        kind = ErrorKind.RECEIVE_TIMEOUT
    elif isinstance(exc, httpx.NetworkError):
        kind = ErrorKind.CONNECTION_ERROR
    elif isinstance(exc, httpx.HTTPStatusError):
        return TransportError(
            ErrorKind.BAD_RESPONSE,
            status_code=exc.response.status_code,
            body=_decode_body(exc.response),
            message=str(exc),
        )
    else:
        kind = ErrorKind.UNKNOWN
    return TransportError(kind, message=str(exc) or None)


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (ValueError, httpx.ResponseNotRead):
        return None
