"""
Example: profile lookup with a local cache in front of a remote source.

Both sources answer with Task[Maybe[Profile]]: a lookup can fail (the
source is down) or succeed with nothing (unknown user). double_alt tries
the cache first and falls back to the remote source on either outcome,
then maybe_to_task drops the "nobody found" case so rendering only runs
for a real profile. An unknown user renders nothing at all.

Run with:
    python examples/profile_lookup.py u-2
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

import structlog

from altask import (
    LoggingForkContext,
    Maybe,
    Task,
    configure_structlog,
    double_alt,
    maybe_to_task,
)


@dataclass(frozen=True, slots=True)
class Profile:
    user_id: str
    name: str


CACHE: dict[str, Profile] = {"u-1": Profile("u-1", "Ada")}
REMOTE: dict[str, Profile] = {
    "u-1": Profile("u-1", "Ada Lovelace"),
    "u-2": Profile("u-2", "Grace Hopper"),
}


def read_cached_profile(user_id: str) -> Task[Maybe[Profile]]:
    return Task.from_computation(lambda: Maybe.from_optional(CACHE.get(user_id)))


def fetch_profile(user_id: str) -> Task[Maybe[Profile]]:
    def computation(reject, resolve) -> None:
        if user_id.startswith("offline"):
            reject(f"remote unavailable for {user_id}")
            return
        resolve(Maybe.from_optional(REMOTE.get(user_id)))

    return Task(computation)


def render(profile: Profile) -> str:
    return f"<h1>{profile.name}</h1>"


def load_profile_page(user_id: str) -> Task[str]:
    return (
        double_alt(read_cached_profile(user_id), fetch_profile(user_id))
        .chain(maybe_to_task)
        .map(render)
    )


def main() -> None:
    configure_structlog()
    log = structlog.get_logger()
    user_id = sys.argv[1] if len(sys.argv) > 1 else "u-1"

    load_profile_page(user_id).fork_within(
        LoggingForkContext(operation="LoadProfile"),
        lambda reason: log.error("profile.failed", user_id=user_id, reason=str(reason)),
        lambda html: print(html),  # noqa: T201
    )


if __name__ == "__main__":
    main()
