"""Tests for the Failure hierarchy."""

import pytest
from pydantic import ValidationError

from repocore.domain.failures import (
    AuthFailure,
    CacheFailure,
    ClientErrorFailure,
    ConfigurationFailure,
    Failure,
    FailureError,
    GatewayTimeoutFailure,
    GenericFailure,
    NetworkFailure,
    NotFoundFailure,
    ServerFailure,
    ServiceUnavailableFailure,
    TooManyRequestsFailure,
    UnauthorizedFailure,
    ValidationFailure,
)
from repocore.domain.result import Error


class TestDefaults:
    @pytest.mark.parametrize(
        ("failure_cls", "fragment"),
        [
            (UnauthorizedFailure, "credentials were missing or incorrect"),
            (NotFoundFailure, "could not be found"),
            (TooManyRequestsFailure, "rate limit exceeded"),
            (ServiceUnavailableFailure, "service unavailable"),
            (GatewayTimeoutFailure, "gateway timeout"),
        ],
    )
    def test_default_message(self, failure_cls: type[Failure], fragment: str) -> None:
        assert fragment in failure_cls().message.lower()

    def test_status_specific_defaults(self) -> None:
        assert NotFoundFailure().status_code == 404
        assert ServiceUnavailableFailure().status_code == 503
        assert ServerFailure().status_code is None

    def test_validation_default_message(self) -> None:
        failure = ValidationFailure(errors={"email": "required"})
        assert failure.message == "One or more validation errors occurred."
        assert failure.errors == {"email": "required"}


class TestHierarchy:
    @pytest.mark.parametrize(
        "failure_cls",
        [UnauthorizedFailure, NotFoundFailure, ClientErrorFailure, ServerFailure, GatewayTimeoutFailure],
    )
    def test_network_variants(self, failure_cls: type[Failure]) -> None:
        assert issubclass(failure_cls, NetworkFailure)

    def test_configuration_is_generic(self) -> None:
        assert issubclass(ConfigurationFailure, GenericFailure)

    @pytest.mark.parametrize("failure_cls", [CacheFailure, AuthFailure, ValidationFailure, GenericFailure])
    def test_non_network_variants(self, failure_cls: type[Failure]) -> None:
        assert not issubclass(failure_cls, NetworkFailure)


class TestValueSemantics:
    def test_equal_by_value(self) -> None:
        assert CacheFailure(message="disk full") == CacheFailure(message="disk full")

    def test_type_participates_in_equality(self) -> None:
        assert CacheFailure(message="x") != AuthFailure(message="x")

    def test_validation_errors_participate(self) -> None:
        assert ValidationFailure(errors={"a": "bad"}) != ValidationFailure(errors={"b": "bad"})

    def test_validation_failure_hashable(self) -> None:
        first = ValidationFailure(errors={"email": "required", "name": "blank"})
        second = ValidationFailure(errors={"name": "blank", "email": "required"})
        assert hash(first) == hash(second)
        assert len({first, second}) == 1
        assert hash(Error(first)) == hash(Error(second))

    def test_frozen(self) -> None:
        failure = GenericFailure(message="x")
        with pytest.raises(ValidationError):
            failure.message = "y"  # type: ignore[misc]

    def test_str(self) -> None:
        assert str(AuthFailure(message="expired")) == "AuthFailure(message=expired)"

    def test_carries_cause(self) -> None:
        cause = ValueError("bad")
        failure = GenericFailure(message="bad", cause=cause, trace="tb")
        assert failure.cause is cause
        assert failure.trace == "tb"


class TestFailureError:
    def test_wraps_failure(self) -> None:
        failure = AuthFailure(message="token expired")
        exc = FailureError(failure)
        assert exc.failure is failure
        assert str(exc) == "token expired"
