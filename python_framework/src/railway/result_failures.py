"""
Convenience factory methods for common Result failures.

    from railway.result_failures import ResultFailures

    # Instead of:
    Result.failure(ErrorCode.VALIDATION_ERROR, "keychain password must not be empty")

    # Write:
    ResultFailures.validation_error("keychain password must not be empty")
"""

from __future__ import annotations

from collections.abc import Sequence

from railway.failure import ErrorCode
from railway.result import Result


class ResultFailures:
    """Factory methods for the failures raised outside `from_computation`."""

    @staticmethod
    def validation_error(message: str) -> Result:
        """Invalid input — missing fields, wrong format."""
        return Result.failure(ErrorCode.VALIDATION_ERROR, message)

    @staticmethod
    def command_error(
        argv: Sequence[str],
        exit_code: int,
        diagnostic: str,
    ) -> Result:
        """
        An external command exited non-zero.

        The message names the program and its first argument (the verb),
        never the full argv, so secrets passed as arguments are not leaked.

            ResultFailures.command_error(["security", "unlock-keychain", ...], 51, "bad password")
            # → COMMAND_ERROR: "security unlock-keychain failed with exit code 51: bad password"
        """
        label = " ".join(argv[:2])
        message = f"{label} failed with exit code {exit_code}"
        diagnostic = diagnostic.strip()
        if diagnostic:
            message = f"{message}: {diagnostic}"
        return Result.failure(ErrorCode.COMMAND_ERROR, message)
