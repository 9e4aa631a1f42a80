"""Tests for TaskAssertions and ForkRecorder."""

import pytest

from altask import ForkRecorder, Task, TaskAssertions


class TestForkRecorder:
    def test_records_in_order(self):
        recorder = ForkRecorder()
        recorder.resolve(1)
        recorder.reject("x")
        assert recorder.calls == [("resolve", 1), ("reject", "x")]
        assert recorder.resolutions == [1]
        assert recorder.rejections == ["x"]


class TestAssertResolves:
    def test_returns_value(self):
        assert TaskAssertions.assert_resolves(Task.of(3)) == 3

    def test_fails_on_rejection(self):
        with pytest.raises(AssertionError, match="Expected a single resolution"):
            TaskAssertions.assert_resolves(Task.rejected("bad"))

    def test_fails_on_no_outcome(self):
        with pytest.raises(AssertionError, match="Expected a single resolution"):
            TaskAssertions.assert_resolves(Task.empty())

    def test_fails_on_wrong_value(self):
        with pytest.raises(AssertionError, match="Expected resolution with 4"):
            TaskAssertions.assert_resolves(Task.of(3), 4)


class TestAssertRejects:
    def test_returns_reason(self):
        assert TaskAssertions.assert_rejects(Task.rejected("bad")) == "bad"

    def test_fails_on_resolution(self):
        with pytest.raises(AssertionError, match="Expected a single rejection"):
            TaskAssertions.assert_rejects(Task.of(1))

    def test_fails_on_wrong_reason(self):
        with pytest.raises(AssertionError, match="Expected rejection with 'other'"):
            TaskAssertions.assert_rejects(Task.rejected("bad"), "other")


class TestAssertNoOutcome:
    def test_passes_for_empty(self):
        TaskAssertions.assert_no_outcome(Task.empty())

    def test_fails_when_task_settles(self):
        with pytest.raises(AssertionError, match="Expected no outcome"):
            TaskAssertions.assert_no_outcome(Task.of(1))
