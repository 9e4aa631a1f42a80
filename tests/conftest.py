"""
Shared test fixtures for the altask test suite.

Every test starts from default settings (no ALTASK_* variables, fresh
settings cache) and from structlog's default configuration.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
import structlog

from altask import ForkRecorder, Task, get_settings


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Strip ALTASK_* variables and reset the cached settings around each test."""
    for name in list(os.environ):
        if name.startswith("ALTASK_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any structlog.configure() a test performed."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def recorder() -> ForkRecorder:
    """A fresh callback recorder for fork(recorder.reject, recorder.resolve)."""
    return ForkRecorder()


@pytest.fixture()
def counting_task():
    """
    Factory for a Task that appends to ``counter`` each time its computation runs.

    Lets tests observe how many times work actually executed.
    """

    def make(counter: list[int], value: object = "done") -> Task:
        def computation(_reject, resolve) -> None:
            counter.append(1)
            resolve(value)

        return Task(computation)

    return make
