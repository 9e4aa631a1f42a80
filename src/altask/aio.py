"""
asyncio bridge — drive coroutines from Tasks and await Tasks from coroutines.

    async def fetch_profile(user_id: str) -> Maybe[Profile]: ...

    profile_task = from_coroutine(fetch_profile, "u-1")      # cold, nothing scheduled yet
    profile = await to_awaitable(double_alt(cached, profile_task), timeout=2.0)

Tasks may settle on any thread; settlement is marshalled back onto the
awaiting event loop with ``call_soon_threadsafe``.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional, TypeVar

import structlog

from altask.config import get_settings
from altask.failure import ErrorCode, FailureDescription, TaskRejectedError
from altask.task import Task

T = TypeVar("T")
log = structlog.get_logger()


def from_coroutine(fn: Callable[..., Awaitable[T]], *args: Any) -> Task[T]:
    """
    Wrap a coroutine function as a cold Task.

    Each fork calls ``fn(*args)`` and schedules it on the running event
    loop, so forking requires a running loop (without one the fork fails
    like any raising computation). A coroutine that raises
    rejects with FailureDescription(ASYNC_ERROR); a cancelled one never
    settles.
    """

    def computation(reject: Callable[[Any], None], resolve: Callable[[T], None]) -> None:
        loop = asyncio.get_running_loop()
        future = loop.create_task(fn(*args))

        def on_done(done: asyncio.Future[T]) -> None:
            if done.cancelled():
                log.debug("task.coroutine_cancelled", coroutine=getattr(fn, "__qualname__", repr(fn)))
                return
            error = done.exception()
            if error is not None:
                reject(FailureDescription.from_exception(error, ErrorCode.ASYNC_ERROR))
            else:
                resolve(done.result())

        future.add_done_callback(on_done)

    return Task(computation)


async def to_awaitable(task: Task[T], timeout: Optional[float] = None) -> T:
    """
    Fork ``task`` and wait for its outcome.

    Returns the resolved value. A rejection raises TaskRejectedError with
    the reason attached (chained to the wrapped exception when the reason
    is a FailureDescription carrying one).

    ``timeout=None`` uses the configured await_timeout_seconds; a timeout of
    0 waits forever. A task that does not settle in time raises TimeoutError.
    """
    if timeout is None:
        timeout = get_settings().await_timeout_seconds or None

    loop = asyncio.get_running_loop()
    outcome: asyncio.Future[T] = loop.create_future()

    def settle(setter: Callable[[Any], None], payload: Any) -> None:
        if not outcome.done():
            setter(payload)

    def on_reject(reason: Any) -> None:
        loop.call_soon_threadsafe(settle, outcome.set_exception, _rejection_error(reason))

    def on_resolve(value: T) -> None:
        loop.call_soon_threadsafe(settle, outcome.set_result, value)

    task.fork(on_reject, on_resolve)
    try:
        return await asyncio.wait_for(outcome, timeout)
    except TimeoutError:
        log.warning(
            "task.await_timeout",
            code=ErrorCode.TIMEOUT_ERROR.value,
            timeout_seconds=timeout,
        )
        raise


def _rejection_error(reason: Any) -> TaskRejectedError:
    error = TaskRejectedError(reason)
    if isinstance(reason, FailureDescription) and reason.exception is not None:
        error.__cause__ = reason.exception
    return error
