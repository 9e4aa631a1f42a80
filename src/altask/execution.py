"""
Fork contexts — separate WHAT (a composed Task) from HOW it is started.

A composed Task is pure description. A ForkContext decides how the fork
happens: directly, or wrapped with logging and timing.

    task = (
        lookup_profile(user_id)
        .chain(maybe_to_task)
        .map(render)
    )
    task.fork_within(LoggingForkContext(operation="LoadProfile"), show_error, display)

Contexts wrap the callbacks, never the outcome: whatever the Task would
have delivered is delivered unchanged.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Callable, Protocol, TypeVar, runtime_checkable

import structlog

if TYPE_CHECKING:
    from altask.task import Task

T = TypeVar("T")
log = structlog.get_logger()


@runtime_checkable
class ForkContext(Protocol):
    """
    Protocol for fork contexts.

    Any class implementing fork(task, on_reject, on_resolve) satisfies it
    structurally, no inheritance needed.
    """

    def fork(
        self,
        task: Task[T],
        on_reject: Callable[[Any], None],
        on_resolve: Callable[[T], None],
    ) -> None:
        """Fork ``task`` within this context."""
        ...


class DirectForkContext:
    """
    Passthrough context: forks the task as-is.

    Use for tests and for code paths that need no observability.
    """

    def fork(
        self,
        task: Task[T],
        on_reject: Callable[[Any], None],
        on_resolve: Callable[[T], None],
    ) -> None:
        task.fork(on_reject, on_resolve)


class LoggingForkContext:
    """
    Context that logs the fork start and, once settled, the outcome and duration.

    Wraps another context (decorator pattern). A task that never settles
    only produces the ``fork.started`` event.

        ctx = LoggingForkContext(operation="LoadProfile")
    """

    def __init__(
        self,
        inner: ForkContext | None = None,
        operation: str = "unknown",
    ) -> None:
        self._inner = inner or DirectForkContext()
        self._operation = operation

    def fork(
        self,
        task: Task[T],
        on_reject: Callable[[Any], None],
        on_resolve: Callable[[T], None],
    ) -> None:
        log.info("fork.started", operation=self._operation)
        start = time.monotonic()

        def settled(outcome: str) -> None:
            log.info(
                "fork.settled",
                operation=self._operation,
                outcome=outcome,
                elapsed_seconds=round(time.monotonic() - start, 3),
            )

        def rejected(reason: Any) -> None:
            settled("rejected")
            on_reject(reason)

        def resolved(value: T) -> None:
            settled("resolved")
            on_resolve(value)

        self._inner.fork(task, rejected, resolved)
