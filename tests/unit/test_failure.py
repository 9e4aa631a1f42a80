"""Tests for FailureDescription, ErrorCode and TaskRejectedError."""

from datetime import UTC, datetime

from altask import ErrorCode, FailureDescription, TaskRejectedError


class TestErrorCode:
    def test_all_error_codes_exist(self):
        assert {code.value for code in ErrorCode} == {
            "COMPUTATION_ERROR",
            "ABSENT_VALUE",
            "ASYNC_ERROR",
            "TIMEOUT_ERROR",
        }


class TestFailureDescription:
    def test_fields(self):
        desc = FailureDescription(ErrorCode.ABSENT_VALUE, "no profile")
        assert desc.code == ErrorCode.ABSENT_VALUE
        assert desc.message == "no profile"
        assert desc.exception is None
        assert desc.timestamp <= datetime.now(UTC)

    def test_equality_ignores_exception_and_timestamp(self):
        a = FailureDescription(ErrorCode.ASYNC_ERROR, "x", ValueError("a"))
        b = FailureDescription(ErrorCode.ASYNC_ERROR, "x")
        assert a == b
        assert a != FailureDescription(ErrorCode.ASYNC_ERROR, "y")
        assert a != FailureDescription(ErrorCode.COMPUTATION_ERROR, "x")

    def test_from_exception_uses_message(self):
        ex = ValueError("bad value")
        desc = FailureDescription.from_exception(ex)
        assert desc.code == ErrorCode.COMPUTATION_ERROR
        assert desc.message == "bad value"
        assert desc.exception is ex

    def test_from_exception_without_message_uses_type_name(self):
        desc = FailureDescription.from_exception(TimeoutError(), ErrorCode.TIMEOUT_ERROR)
        assert desc.message == "TimeoutError"
        assert desc.code == ErrorCode.TIMEOUT_ERROR

    def test_full_stack_trace_without_exception(self):
        assert FailureDescription(ErrorCode.ABSENT_VALUE, "plain").full_stack_trace() == "plain"

    def test_full_stack_trace_with_exception(self):
        try:
            raise RuntimeError("kaboom")
        except RuntimeError as e:
            desc = FailureDescription.from_exception(e)
        trace = desc.full_stack_trace()
        assert trace.startswith("kaboom\n")
        assert "RuntimeError: kaboom" in trace

    def test_exception_hidden_from_repr(self):
        desc = FailureDescription(ErrorCode.COMPUTATION_ERROR, "x", ValueError("secret"))
        assert "secret" not in repr(desc)


class TestTaskRejectedError:
    def test_keeps_plain_reason(self):
        error = TaskRejectedError("offline")
        assert error.reason == "offline"
        assert "'offline'" in str(error)

    def test_formats_failure_description(self):
        error = TaskRejectedError(FailureDescription(ErrorCode.ASYNC_ERROR, "refused"))
        assert str(error) == "Task rejected with ASYNC_ERROR: refused"
