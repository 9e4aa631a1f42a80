"""
Failure description — structured reasons for the Task rejection channel.

A Task may reject with any value the computation hands to ``reject``.
When altask itself has to produce a rejection (a computation raised, a
coroutine failed, a value was absent) it uses a FailureDescription so
callers get a stable code, a message and the original exception.

    >>> desc = FailureDescription(ErrorCode.ABSENT_VALUE, "no profile")
    >>> desc.code
    <ErrorCode.ABSENT_VALUE: 'ABSENT_VALUE'>
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """Codes for failures reported by altask itself."""

    COMPUTATION_ERROR = "COMPUTATION_ERROR"
    """A Task computation, or a function passed to map/chain/map_rejected/fold, raised."""

    ABSENT_VALUE = "ABSENT_VALUE"
    """A Task resolved with Nothing where a present value was required."""

    ASYNC_ERROR = "ASYNC_ERROR"
    """A coroutine driven by a Task raised."""

    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    """Awaiting a Task exceeded the time limit (tags the task.await_timeout event)."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable rejection reason carrying error code, message, optional exception, and timestamp.

    Equality ignores the exception and timestamp, so two descriptions with the
    same code and message compare equal.
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC), compare=False)

    @staticmethod
    def from_exception(
        exception: BaseException,
        code: ErrorCode = ErrorCode.COMPUTATION_ERROR,
    ) -> FailureDescription:
        """Wrap an exception, using its text (or its type name) as the message."""
        message = str(exception) or type(exception).__name__
        return FailureDescription(code=code, message=message, exception=exception)

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__))
        return f"{self.message}\n{tb}"


class TaskRejectedError(Exception):
    """
    Raised when an awaited Task rejects.

    The rejection reason is kept on ``reason``. When the reason wraps an
    exception it is chained as ``__cause__`` by the raiser.
    """

    def __init__(self, reason: object) -> None:
        self.reason = reason
        if isinstance(reason, FailureDescription):
            text = f"{reason.code.value}: {reason.message}"
        else:
            text = repr(reason)
        super().__init__(f"Task rejected with {text}")
