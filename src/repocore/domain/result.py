"""Result: the two-case outcome every repository operation returns.

INVARIANT: exactly one of ``is_success`` / ``is_error`` holds, and only
the matching accessor (``data`` or ``failure``) is defined. Reading the
other one raises :class:`ResultAccessError`, because it signals a caller
bug rather than a runtime condition.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never

from repocore.domain.failures import Failure


class ResultAccessError(RuntimeError):
    """Raised when a Result is read through the accessor of the other case."""


@dataclass(frozen=True)
class Success[T]:
    """Successful outcome holding *value*."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_error(self) -> bool:
        return False

    @property
    def data(self) -> T:
        return self.value

    @property
    def failure(self) -> Never:
        raise ResultAccessError(f"Cannot read failure from a successful result: {self.value!r}")

    @property
    def data_or_none(self) -> T | None:
        return self.value

    @property
    def failure_or_none(self) -> None:
        return None

    def match[R](
        self,
        on_success: Callable[[T], R],
        on_error: Callable[[Failure], R],
    ) -> R:
        """Apply *on_success* to the value; *on_error* is never called."""
        return on_success(self.value)

    def map[U](self, fn: Callable[[T], U]) -> Success[U]:
        return Success(fn(self.value))


@dataclass(frozen=True)
class Error:
    """Failed outcome holding a :class:`Failure`."""

    error: Failure

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_error(self) -> bool:
        return True

    @property
    def data(self) -> Never:
        raise ResultAccessError(f"Cannot read data from a failed result. Original failure: {self.error}")

    @property
    def failure(self) -> Failure:
        return self.error

    @property
    def data_or_none(self) -> None:
        return None

    @property
    def failure_or_none(self) -> Failure:
        return self.error

    def match[R](
        self,
        on_success: Callable[[Any], R],
        on_error: Callable[[Failure], R],
    ) -> R:
        """Apply *on_error* to the failure; *on_success* is never called."""
        return on_error(self.error)

    def map(self, fn: Callable[[Any], Any]) -> Error:
        return self


type Result[T] = Success[T] | Error


def success[T](value: T) -> Result[T]:
    """Wrap *value* as a successful Result."""
    return Success(value)


def error(failure: Failure) -> Result[Any]:
    """Wrap *failure* as a failed Result."""
    return Error(failure)
