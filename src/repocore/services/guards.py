"""Guard combinators: run an operation and turn every outcome into a Result.

INVARIANT: No exception escapes a guard except ``BaseException`` subclasses
that are not ``Exception`` (cancellation, interpreter exit).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from repocore.domain.failures import ClientErrorFailure
from repocore.domain.result import Error, Result, Success
from repocore.network.classifier import classify_exception

NO_DATA_MESSAGE = "The call completed successfully but produced no data."


async def safe_call[T](operation: Callable[[], Awaitable[T | None]]) -> Result[T]:
    """Await *operation* and wrap its value.

    A ``None`` return is a business-logic failure, not a success: callers
    never see ``Success(None)`` from this guard.
    """
    try:
        value = await operation()
    except Exception as exc:
        return Error(classify_exception(exc))
    if value is None:
        return Error(ClientErrorFailure(message=NO_DATA_MESSAGE))
    return Success(value)


async def safe_void_call(operation: Callable[[], Awaitable[Any]]) -> Result[None]:
    """Await an operation whose value is irrelevant (delete, save)."""
    try:
        await operation()
    except Exception as exc:
        return Error(classify_exception(exc))
    return Success(None)


async def safe_remote_call[T, R](
    remote_call: Callable[[], Awaitable[Result[T]]],
    on_success: Callable[[T], R] | None = None,
    on_before_success: Callable[[T], None] | None = None,
) -> Result[R] | Result[T]:
    """Compose a Result-returning call with an optional transform.

    On ``Success(x)``: run *on_before_success(x)*, then map ``x`` through
    *on_success* (or pass it through unchanged). On ``Error``: propagate the
    failure as-is. Exceptions from the call, the hook, or the transform are
    classified the same way :func:`safe_call` does.
    """
    try:
        result = await remote_call()
        if result.is_error:
            return result
        value = result.data
        if on_before_success is not None:
            on_before_success(value)
        if on_success is None:
            return Success(value)
        return Success(on_success(value))
    except Exception as exc:
        return Error(classify_exception(exc))


async def safe_remote_call_void[T](
    remote_call: Callable[[], Awaitable[Result[T]]],
    on_before_success: Callable[[T], None] | None = None,
) -> Result[None]:
    """Like :func:`safe_remote_call`, discarding the success value."""
    return await safe_remote_call(
        remote_call,
        on_success=lambda _value: None,
        on_before_success=on_before_success,
    )
