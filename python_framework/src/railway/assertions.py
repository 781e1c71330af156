"""
Test assertions for Result values.

Expressive assert helpers that produce clear failure messages:

    from railway import ResultAssertions

    def test_provisioning_succeeds():
        output = ResultAssertions.assert_success(run_provisioning(request, runner))
        assert "imported" in output

    def test_suffixed_name_rejected():
        result = run_cleanup("ci-store.keychain", runner)
        ResultAssertions.assert_failure(result, ErrorCode.VALIDATION_ERROR)
        ResultAssertions.assert_failure_message_contains(result, ".keychain")
"""

from __future__ import annotations

from typing import TypeVar

from railway.failure import ErrorCode, FailureDescription
from railway.result import Result

T = TypeVar("T")


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_success(result: Result[T], message: str = "") -> T:
        """Assert the Result is a Success and return the value."""
        context = f" — {message}" if message else ""
        assert result.is_success(), (
            f"Expected Success but got Failure("
            f"{result.error().code.value}: {result.error().message!r}){context}"
        )
        return result.value()

    @staticmethod
    def assert_failure(
        result: Result[T],
        expected_code: ErrorCode | None = None,
        message: str = "",
    ) -> FailureDescription:
        """
        Assert the Result is a Failure, optionally checking the error code.

            error = ResultAssertions.assert_failure(result, ErrorCode.COMMAND_ERROR)
        """
        context = f" — {message}" if message else ""
        assert result.is_failure(), (
            f"Expected Failure but got Success({result.value()!r}){context}"
        )
        error = result.error()
        if expected_code is not None:
            assert error.code == expected_code, (
                f"Expected error code {expected_code.value} "
                f"but got {error.code.value}: {error.message!r}{context}"
            )
        return error

    @staticmethod
    def assert_failure_message_contains(result: Result[T], substring: str) -> None:
        """Case-insensitive substring check on the failure message."""
        error = ResultAssertions.assert_failure(result)
        assert substring.lower() in error.message.lower(), (
            f"Expected failure message to contain {substring!r} "
            f"but message was: {error.message!r}"
        )
