"""
altask — Maybe, Task and Alt for uncertain, deferred and failable values.

    from altask import Just, Nothing, Task, double_alt

    profile = double_alt(read_cached_profile(user_id), fetch_profile(user_id))
    (
        profile
        .map(lambda m: m.map(render).get_or_else("No profile"))
        .fork(show_error, display)
    )

  Maybe   Just(x) | Nothing()            map, chain, alt, get_or_else, equals
  Task    cold (reject, resolve) work    map, chain, alt, fork, of, empty
  Alt     fallback over both             alt(), maybe_to_task(), double_alt()
"""

from altask.maybe import Maybe, Just, Nothing
from altask.task import Task
from altask.alt import Alt, alt, double_alt, first_present, maybe_to_task
from altask.failure import ErrorCode, FailureDescription, TaskRejectedError
from altask.execution import ForkContext, DirectForkContext, LoggingForkContext
from altask.aio import from_coroutine, to_awaitable
from altask.config import AltaskSettings, get_settings
from altask.logging_setup import configure_structlog
from altask.assertions import ForkRecorder, MaybeAssertions, TaskAssertions

__all__ = [
    "Maybe",
    "Just",
    "Nothing",
    "Task",
    "Alt",
    "alt",
    "double_alt",
    "first_present",
    "maybe_to_task",
    "ErrorCode",
    "FailureDescription",
    "TaskRejectedError",
    "ForkContext",
    "DirectForkContext",
    "LoggingForkContext",
    "from_coroutine",
    "to_awaitable",
    "AltaskSettings",
    "get_settings",
    "configure_structlog",
    "ForkRecorder",
    "MaybeAssertions",
    "TaskAssertions",
]

__version__ = "0.1.0"
