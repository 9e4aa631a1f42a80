"""
Alt — fallback composition over Maybe and Task, and the Task[Maybe[T]] adapters.

Both Maybe and Task expose ``.alt(other)``: keep the left operand's
present/resolved outcome, otherwise use the right one. The Alt protocol
names that shared interface structurally, and ``alt(a, b, c)`` folds it
left to right.

A Task[Maybe[T]] has two ways to come up empty: it can reject, or it can
resolve with Nothing. Two adapters handle that composite:

  maybe_to_task   Task.of(m).chain(maybe_to_task) turns Nothing into an
                  empty Task, so downstream map/fork steps simply never run
  double_alt      fall back to a second Task[Maybe[T]] on either kind of
                  emptiness
"""

from __future__ import annotations

from typing import Any, Protocol, Self, TypeVar, runtime_checkable

from altask.failure import ErrorCode, FailureDescription
from altask.maybe import Just, Maybe, Nothing
from altask.task import Task

T = TypeVar("T")

_ABSENT = FailureDescription(ErrorCode.ABSENT_VALUE, "Task resolved with Nothing")


@runtime_checkable
class Alt(Protocol):
    """Anything offering a left-biased fallback via ``.alt(other)``."""

    def alt(self, other: Self) -> Self: ...


def alt(first: Any, *rest: Any) -> Any:
    """
    Fold ``.alt`` over the arguments, left to right.

        alt(a, b, c) == a.alt(b).alt(c)

    Works for any Alt instance (Maybe, Task, or a user type).
    """
    if not isinstance(first, Alt):
        raise TypeError(f"{type(first).__name__} does not support alt()")
    result = first
    for candidate in rest:
        result = result.alt(candidate)
    return result


def maybe_to_task(m: Maybe[T]) -> Task[T]:
    """
    Just(x) becomes Task.of(x); Nothing becomes Task.empty().

    Used with chain() to collapse Task[Maybe[T]] into Task[T]:

        lookup_profile(user_id).chain(maybe_to_task).map(render).fork(show_error, display)

    When the profile is absent nothing downstream runs. Anything other
    than a Maybe raises TypeError.
    """
    match m:
        case Just(value):
            return Task.of(value)
        case Nothing():
            return Task.empty()
    raise TypeError(f"maybe_to_task expects a Maybe, got {type(m).__name__}")


def _require_present(m: Maybe[T]) -> Task[Maybe[T]]:
    if m.equals(Nothing()):
        return Task.rejected(_ABSENT)
    return Task.of(m)


def double_alt(a: Task[Maybe[T]], b: Task[Maybe[T]]) -> Task[Maybe[T]]:
    """
    Fallback between two Task[Maybe[T]] values.

    ``b`` is used when ``a`` rejects or when ``a`` resolves with Nothing.
    A present value from ``a`` always wins. Whatever ``b`` produces
    (Just, Nothing or a rejection) is relayed, and ``b`` is forked at most
    once per fork.

        double_alt(read_cached_profile(user_id), fetch_profile(user_id))
    """
    return a.chain(_require_present).alt(b)


def first_present(*tasks: Task[Maybe[T]]) -> Task[Maybe[T]]:
    """
    double_alt over any number of candidates, tried in order.

    With no candidates the result resolves with Nothing.
    """
    if not tasks:
        return Task.of(Nothing())
    result = tasks[0]
    for candidate in tasks[1:]:
        result = double_alt(result, candidate)
    return result
