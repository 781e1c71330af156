"""
Failure description — structured error information for the failure track.

An ErrorCode classifies the failure; FailureDescription carries the code,
a human-readable message, the optional causing exception, and a timestamp.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    - VALIDATION: the caller supplied bad input, nothing was run
    - COMMAND: an external tool ran and reported failure
    - TECHNICAL: the host got in the way (spawn failure, unwritable file)
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Invalid input: empty required field, malformed name."""

    COMMAND_ERROR = "COMMAND_ERROR"
    """An external command ran and exited with a non-zero status."""

    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Infrastructure issues: process could not be spawned, file not writable."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying error code, message, optional exception, and timestamp.

    >>> desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "Name is required")
    >>> desc.code
    <ErrorCode.VALIDATION_ERROR: 'VALIDATION_ERROR'>
    >>> desc.message
    'Name is required'
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
