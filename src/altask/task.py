"""
Task — a cold, re-runnable deferred computation.

A Task[T] wraps a computation ``(reject, resolve) -> None``. Nothing runs
until the task is forked, and every fork runs the computation again with
no state shared between forks:

    ┌──────────┐  map/chain   ┌──────────┐   alt    ┌──────────┐   fork
    │ Task[T]  │─────────────→│ Task[U]  │─────────→│ Task[U]  │─────────→ on_reject(reason)
    │  (cold)  │              │  (cold)  │          │  (cold)  │           on_resolve(value)
    └──────────┘              └──────────┘          └──────────┘

Rejection short-circuits map() and chain(); alt() is the recovery step.
Task.empty() never settles, and anything composed from it never settles.

Settlement: every fork installs a guard so at most one callback runs, at
most once. A computation that tries to settle again is ignored and a
``task.settle_ignored`` warning is logged.

Synchronous errors: with the default ``sync_errors="reject"`` setting, an
exception raised by a computation before it settles becomes a rejection
with a FailureDescription(COMPUTATION_ERROR). Exceptions raised after
settlement (for example from the caller's own callback) propagate out of
fork(). Functions handed to map(), chain(), map_rejected() and fold()
reject the same way even when the upstream settles later, on another
thread or event-loop callback. With ``sync_errors="raise"`` every
exception propagates.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Callable, Generic, Literal, Optional, TypeVar

import structlog

from altask.config import get_settings
from altask.failure import FailureDescription

if TYPE_CHECKING:
    from altask.execution import ForkContext

T = TypeVar("T")
U = TypeVar("U")

Reject = Callable[[Any], None]
Resolve = Callable[[Any], None]
Computation = Callable[[Reject, Resolve], None]

log = structlog.get_logger()

_FAILED = object()


class _SettleGuard(Generic[T]):
    """Per-fork gate letting exactly one of reject/resolve through, once."""

    __slots__ = ("_on_reject", "_on_resolve", "_lock", "_outcome")

    def __init__(self, on_reject: Reject, on_resolve: Resolve) -> None:
        self._on_reject = on_reject
        self._on_resolve = on_resolve
        self._lock = threading.Lock()
        self._outcome: Optional[Literal["rejected", "resolved"]] = None

    @property
    def settled(self) -> bool:
        return self._outcome is not None

    def _claim(self, outcome: Literal["rejected", "resolved"]) -> bool:
        with self._lock:
            if self._outcome is not None:
                log.warning(
                    "task.settle_ignored",
                    settled_as=self._outcome,
                    attempted=outcome,
                )
                return False
            self._outcome = outcome
            return True

    def reject(self, reason: Any) -> None:
        if self._claim("rejected"):
            self._on_reject(reason)

    def resolve(self, value: T) -> None:
        if self._claim("resolved"):
            self._on_resolve(value)


def _never(reject: Reject, resolve: Resolve) -> None:
    """Computation of Task.empty(): settles neither way."""


class Task(Generic[T]):
    """
    Deferred computation settling to a rejection or a resolved value.

    Usage:
        >>> seen = []
        >>> Task.of(5).map(lambda x: x + 1).fork(seen.append, seen.append)
        >>> seen
        [6]

    Tasks are immutable; every combinator returns a new Task wrapping the
    previous one, and nothing runs until fork().
    """

    __slots__ = ("_computation",)

    def __init__(self, computation: Computation) -> None:
        if not callable(computation):
            raise TypeError(f"Task computation must be callable, got {type(computation).__name__}")
        self._computation = computation

    # ──────────────────────── Execution ────────────────────────

    def fork(self, on_reject: Reject, on_resolve: Resolve) -> None:
        """
        Start the computation. The only way a Task ever runs.

        Each call is an independent run: forking twice runs the work twice.
        At most one of the callbacks is invoked, at most once.
        """
        settings = get_settings()
        guard: _SettleGuard[T] = _SettleGuard(on_reject, on_resolve)
        if settings.trace_forks:
            log.debug("task.forked", computation=_describe(self._computation))

        try:
            self._computation(guard.reject, guard.resolve)
        except Exception as e:
            if settings.sync_errors == "raise" or guard.settled:
                raise
            log.warning(
                "task.computation_failed",
                computation=_describe(self._computation),
                error=str(e),
                error_type=type(e).__name__,
            )
            guard.reject(FailureDescription.from_exception(e))

    def fork_within(
        self,
        context: ForkContext,
        on_reject: Reject,
        on_resolve: Resolve,
    ) -> None:
        """
        Fork through an execution context (logging, timing, ...).

            task.fork_within(LoggingForkContext(operation="LoadProfile"), show_error, render)
        """
        context.fork(self, on_reject, on_resolve)

    # ──────────────────────── Core Transformations ────────────────────────

    def map(self, mapper: Callable[[T], U]) -> Task[U]:
        """
        Transform the resolved value. Rejection passes through, mapper is not called.

            Task.of(5).map(lambda x: x + 1)   # forks to 6
        """

        def computation(reject: Reject, resolve: Resolve) -> None:
            def mapped(value: T) -> None:
                result = _apply(mapper, value, reject)
                if result is not _FAILED:
                    resolve(result)

            self.fork(reject, mapped)

        return Task(computation)

    def chain(self, mapper: Callable[[T], Task[U]]) -> Task[U]:
        """
        Chain a Task-returning function, flattening Task[Task[U]] into Task[U].

        On resolution forks ``mapper(value)`` and relays its outcome.
        On rejection mapper is never called.

            Task.of(user_id).chain(fetch_profile)
        """

        def computation(reject: Reject, resolve: Resolve) -> None:
            def chained(value: T) -> None:
                next_task = _apply(mapper, value, reject)
                if next_task is not _FAILED:
                    next_task.fork(reject, resolve)

            self.fork(reject, chained)

        return Task(computation)

    def map_rejected(self, mapper: Callable[[Any], Any]) -> Task[T]:
        """Transform the rejection reason. Resolution passes through unchanged."""
        def computation(reject: Reject, resolve: Resolve) -> None:
            def remapped(reason: Any) -> None:
                new_reason = _apply(mapper, reason, reject)
                if new_reason is not _FAILED:
                    reject(new_reason)

            self.fork(remapped, resolve)

        return Task(computation)

    def fold(
        self,
        on_reject: Callable[[Any], U],
        on_resolve: Callable[[T], U],
    ) -> Task[U]:
        """
        A Task that resolves with either branch's result.

        It only rejects when the branch function itself raises.
        """

        def computation(reject: Reject, resolve: Resolve) -> None:
            def settle_with(branch: Callable[[Any], U]) -> Callable[[Any], None]:
                def settle(payload: Any) -> None:
                    result = _apply(branch, payload, reject)
                    if result is not _FAILED:
                        resolve(result)

                return settle

            self.fork(settle_with(on_reject), settle_with(on_resolve))

        return Task(computation)

    def peek(self, action: Callable[[T], Any]) -> Task[T]:
        """Run a side effect on the resolved value without altering it."""

        def tap(value: T) -> T:
            action(value)
            return value

        return self.map(tap)

    # ──────────────────────── Recovery ────────────────────────

    def alt(self, other: Task[T]) -> Task[T]:
        """
        Fall back to ``other`` when this Task rejects.

        Only rejection triggers the fallback; a resolved value is relayed
        as-is, whatever its truthiness. ``other`` is forked only after the
        rejection, and this Task's rejection reason is dropped.

            fetch_from_cache(key).alt(fetch_from_origin(key))
        """
        return Task(lambda reject, resolve: self.fork(lambda _reason: other.fork(reject, resolve), resolve))

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def of(value: T) -> Task[T]:
        """A Task resolving immediately with ``value``."""
        return Task(lambda _reject, resolve: resolve(value))

    @staticmethod
    def rejected(reason: Any) -> Task[Any]:
        """A Task rejecting immediately with ``reason``."""
        return Task(lambda reject, _resolve: reject(reason))

    @staticmethod
    def empty() -> Task[Any]:
        """A Task that never settles: neither callback is ever called."""
        return EMPTY

    @staticmethod
    def from_computation(computation: Callable[[], T]) -> Task[T]:
        """
        Defer a zero-argument function until fork time.

        The function runs on every fork; its return value resolves the Task.
        Exceptions follow the sync_errors policy.

            Task.from_computation(lambda: parse(raw))
        """
        return Task(lambda _reject, resolve: resolve(computation()))

    def __repr__(self) -> str:
        if self is EMPTY:
            return "Task.empty()"
        return f"Task({_describe(self._computation)})"


def _describe(computation: Callable[..., Any]) -> str:
    return getattr(computation, "__qualname__", None) or repr(computation)


def _apply(fn: Callable[[Any], Any], payload: Any, reject: Reject) -> Any:
    """
    Run a user function inside a combinator.

    Under the reject policy an exception rejects through ``reject`` and
    _FAILED is returned, wherever the upstream settled (inside fork() or
    later on another thread or loop callback).
    """
    try:
        return fn(payload)
    except Exception as e:
        if get_settings().sync_errors == "raise":
            raise
        log.warning(
            "task.function_failed",
            function=_describe(fn),
            error=str(e),
            error_type=type(e).__name__,
        )
        reject(FailureDescription.from_exception(e))
        return _FAILED


EMPTY: Task[Any] = Task(_never)
