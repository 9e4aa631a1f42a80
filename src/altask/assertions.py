"""
Test assertions for Maybe and Task values.

Expressive assert helpers that produce clear failure messages:

    from altask import MaybeAssertions, TaskAssertions

    def test_lookup_falls_back():
        task = double_alt(Task.of(Nothing()), Task.of(Just(42)))
        maybe = TaskAssertions.assert_resolves(task)
        assert MaybeAssertions.assert_just(maybe) == 42

    def test_empty_task_never_settles():
        TaskAssertions.assert_no_outcome(Task.empty().map(str))

TaskAssertions fork synchronously: they are meant for tasks that settle (or
are known never to settle) before fork() returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeVar

from altask.maybe import Just, Maybe
from altask.task import Task

T = TypeVar("T")

_MISSING = object()


@dataclass
class ForkRecorder:
    """
    Records every callback invocation of one or more forks.

        recorder = ForkRecorder()
        task.fork(recorder.reject, recorder.resolve)
        assert recorder.calls == [("resolve", 42)]
    """

    calls: list[tuple[str, Any]] = field(default_factory=list)

    def reject(self, reason: Any) -> None:
        self.calls.append(("reject", reason))

    def resolve(self, value: Any) -> None:
        self.calls.append(("resolve", value))

    @property
    def rejections(self) -> list[Any]:
        return [payload for kind, payload in self.calls if kind == "reject"]

    @property
    def resolutions(self) -> list[Any]:
        return [payload for kind, payload in self.calls if kind == "resolve"]


class MaybeAssertions:
    """Expressive test assertions for Maybe values."""

    @staticmethod
    def assert_just(maybe: Maybe[T], expected: Any = _MISSING) -> T:
        """
        Assert the Maybe is a Just and return its value.

        When ``expected`` is given the value must also equal it.
        """
        assert isinstance(maybe, Just), f"Expected Just but got {maybe!r}"
        if expected is not _MISSING:
            assert maybe.value == expected, (
                f"Expected Just({expected!r}) but got {maybe!r}"
            )
        return maybe.value

    @staticmethod
    def assert_nothing(maybe: Maybe[Any]) -> None:
        """Assert the Maybe is Nothing."""
        assert maybe.is_nothing(), f"Expected Nothing but got {maybe!r}"


class TaskAssertions:
    """Expressive test assertions for Task values."""

    @staticmethod
    def fork_sync(task: Task[Any]) -> ForkRecorder:
        """Fork once and return the recorder holding whatever settled synchronously."""
        recorder = ForkRecorder()
        task.fork(recorder.reject, recorder.resolve)
        return recorder

    @staticmethod
    def assert_resolves(task: Task[T], expected: Any = _MISSING) -> T:
        """
        Fork the task, assert it resolved exactly once, and return the value.

            value = TaskAssertions.assert_resolves(Task.of(5).map(inc), 6)
        """
        recorder = TaskAssertions.fork_sync(task)
        assert recorder.calls and recorder.calls[0][0] == "resolve" and len(recorder.calls) == 1, (
            f"Expected a single resolution but got {recorder.calls!r}"
        )
        value = recorder.resolutions[0]
        if expected is not _MISSING:
            assert value == expected, (
                f"Expected resolution with {expected!r} but got {value!r}"
            )
        return value

    @staticmethod
    def assert_rejects(task: Task[Any], expected: Any = _MISSING) -> Any:
        """Fork the task, assert it rejected exactly once, and return the reason."""
        recorder = TaskAssertions.fork_sync(task)
        assert recorder.calls and recorder.calls[0][0] == "reject" and len(recorder.calls) == 1, (
            f"Expected a single rejection but got {recorder.calls!r}"
        )
        reason = recorder.rejections[0]
        if expected is not _MISSING:
            assert reason == expected, (
                f"Expected rejection with {expected!r} but got {reason!r}"
            )
        return reason

    @staticmethod
    def assert_no_outcome(task: Task[Any]) -> None:
        """Fork the task and assert neither callback fired."""
        recorder = TaskAssertions.fork_sync(task)
        assert not recorder.calls, f"Expected no outcome but got {recorder.calls!r}"
