"""Failure hierarchy — the closed error taxonomy returned inside Results.

Hierarchy
---------
Failure
├── NetworkFailure
│   ├── TimeoutFailure / NoConnectionFailure / CancelledFailure
│   ├── UnauthorizedFailure (401) / ForbiddenFailure (403)
│   ├── NotFoundFailure (404) / RequestTimeoutFailure (408)
│   ├── ConflictFailure (409) / TooManyRequestsFailure (429)
│   ├── ClientErrorFailure (400 and other 4xx)
│   ├── InternalServerErrorFailure (500) / NotImplementedFailure (501)
│   ├── BadGatewayFailure (502) / ServiceUnavailableFailure (503)
│   ├── GatewayTimeoutFailure (504)
│   └── ServerFailure (no status code, or an unmapped one)
├── CacheFailure
├── AuthFailure
├── ValidationFailure
└── GenericFailure
    └── ConfigurationFailure

Every variant carries a built-in default message, so ``NotFoundFailure()``
is a complete value. Failures are frozen and compare by value.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Failure(BaseModel):
    """Base of every failure variant.

    Attributes:
        message: Human-readable description.
        cause: The underlying exception, when one was caught.
        trace: Formatted traceback of *cause*, captured at classification time.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    message: str = "An unexpected error occurred."
    cause: BaseException | None = None
    trace: str | None = None

    def __str__(self) -> str:
        return f"{type(self).__name__}(message={self.message})"


# --- Network ---------------------------------------------------------------


class NetworkFailure(Failure):
    """Transport or HTTP-level failure."""

    message: str = "A network error occurred."
    status_code: int | None = None


class TimeoutFailure(NetworkFailure):
    message: str = "The request timed out."


class NoConnectionFailure(NetworkFailure):
    message: str = "No network connectivity detected."


class CancelledFailure(NetworkFailure):
    message: str = "The request was cancelled."


class UnauthorizedFailure(NetworkFailure):
    message: str = "Authentication credentials were missing or incorrect."
    status_code: int | None = 401


class ForbiddenFailure(NetworkFailure):
    message: str = "Access is not allowed."
    status_code: int | None = 403


class NotFoundFailure(NetworkFailure):
    message: str = "The requested resource could not be found."
    status_code: int | None = 404


class RequestTimeoutFailure(NetworkFailure):
    message: str = "The server timed out waiting for the request."
    status_code: int | None = 408


class ConflictFailure(NetworkFailure):
    message: str = "Conflict with current resource state."
    status_code: int | None = 409


class TooManyRequestsFailure(NetworkFailure):
    message: str = "Rate limit exceeded."
    status_code: int | None = 429


class ClientErrorFailure(NetworkFailure):
    """400, any unmapped 4xx, or a call that completed without data."""

    message: str = "The request was invalid."


class InternalServerErrorFailure(NetworkFailure):
    message: str = "Internal server error."
    status_code: int | None = 500


class NotImplementedFailure(NetworkFailure):
    message: str = "The server does not support this operation (not implemented)."
    status_code: int | None = 501


class BadGatewayFailure(NetworkFailure):
    message: str = "Bad gateway: invalid response from an upstream server."
    status_code: int | None = 502


class ServiceUnavailableFailure(NetworkFailure):
    message: str = "Service unavailable: the server cannot handle the request right now."
    status_code: int | None = 503


class GatewayTimeoutFailure(NetworkFailure):
    message: str = "Gateway timeout: an upstream server did not respond in time."
    status_code: int | None = 504


class ServerFailure(NetworkFailure):
    """Server-side failure with no status code, or one outside the known set."""

    message: str = "A server error occurred. Please try again later."


# --- Local / domain --------------------------------------------------------


class CacheFailure(Failure):
    """Local store read or write failed."""

    message: str = "A local cache operation failed."


class AuthFailure(Failure):
    message: str = "Authentication failed."


class ValidationFailure(Failure):
    """Field-level input errors, keyed by field name."""

    message: str = "One or more validation errors occurred."
    errors: dict[str, str] = Field(default_factory=dict)

    def __hash__(self) -> int:
        # errors is a dict; hash a sorted snapshot of it.
        return hash((type(self), self.message, tuple(sorted(self.errors.items()))))


class GenericFailure(Failure):
    """Unclassified failure."""


class ConfigurationFailure(GenericFailure):
    """A repository was asked to use a data source it does not have."""

    message: str = "The repository is misconfigured for this operation."


class FailureError(Exception):
    """Carries a :class:`Failure` across code that has to raise.

    Data sources and use cases may raise this to hand a typed failure to
    the guards; classification returns the wrapped failure unchanged.
    """

    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.message)
        self.failure = failure
