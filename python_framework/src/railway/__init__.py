"""
Railway-Oriented Programming (ROP) Framework for Python.

Explicit, composable, functional error handling — no exceptions in business logic.

    from railway import Result, ErrorCode

    def require_password(password: str) -> Result[str]:
        if password == "":
            return Result.failure(ErrorCode.VALIDATION_ERROR, "password must not be empty")
        return Result.success(password)

    result = (
        Result.success({"keychain": "ci-store", "password": "s3cret"})
        .flat_map(lambda d: require_password(d["password"]))
        .map(lambda _: "password accepted")
    )
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription
from railway.result_failures import ResultFailures
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ResultFailures",
    "ResultAssertions",
]

__version__ = "1.1.0"
