"""UseCase: a single application action returning a Result.

Subclasses implement :meth:`UseCase.execute`; callers invoke the instance.
Exceptions escaping ``execute`` are converted into failures so a use case
never raises for runtime conditions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import structlog

from repocore.domain.failures import Failure, FailureError, GenericFailure
from repocore.domain.result import Error, Result
from repocore.network.classifier import format_trace

log = structlog.get_logger(__name__)

CANCELLED_BEFORE_MESSAGE = "Operation was cancelled before execution."
CANCELLED_DURING_MESSAGE = "Operation was cancelled during error handling."


@dataclass(frozen=True)
class NoParams:
    """Parameter object for use cases that take no input."""


class UseCase[P, T](ABC):
    """Base for use cases.

    ``cancel()`` marks the current (or next) call as cancelled; a cancelled
    call returns a :class:`GenericFailure` rather than its own outcome when
    the cancellation is observed before execution or while handling an
    exception. A completed ``execute`` result is always returned as-is.
    """

    def __init__(self) -> None:
        self._cancelled = False

    async def __call__(self, params: P) -> Result[T]:
        try:
            if self._cancelled:
                return Error(GenericFailure(message=CANCELLED_BEFORE_MESSAGE))
            return await self.execute(params)
        except Exception as exc:
            if self._cancelled:
                return Error(GenericFailure(message=CANCELLED_DURING_MESSAGE))
            log.debug("usecase.failed", usecase=type(self).__name__, error=str(exc))
            return Error(self._handle_error(exc))
        finally:
            self._cancelled = False

    @abstractmethod
    async def execute(self, params: P) -> Result[T]:
        """Perform the action."""

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @staticmethod
    def _handle_error(exc: Exception) -> Failure:
        if isinstance(exc, FailureError):
            return exc.failure
        return GenericFailure(
            message=f"An unexpected error occurred during use case execution: {exc}",
            cause=exc,
            trace=format_trace(exc),
        )
