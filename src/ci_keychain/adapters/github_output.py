"""
GitHub Actions output adapter — publish step outputs via $GITHUB_OUTPUT.

Adapter layer — implements the OutputPublisher port.

The runner exposes a file path in GITHUB_OUTPUT; each output is appended
using the multiline heredoc form so values spanning several lines
(like captured `security` output) survive intact:

  security-response<<ghadelimiter_<uuid>
  <value>
  ghadelimiter_<uuid>
"""

from __future__ import annotations

import uuid
from pathlib import Path

import structlog
from railway import ErrorCode, ResultFailures
from railway.result import Result

log = structlog.get_logger()


class GithubOutputPublisher:
    """
    Append named outputs to the GitHub Actions output file.

    Implements the OutputPublisher port.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def set_output(self, name: str, value: str) -> Result[str]:
        """
        Append `name=value` to the output file.

        Returns Result[str] with the output name on success,
        Result.failure(VALIDATION_ERROR, ...) for a name the runner cannot parse,
        or Result.failure(TECHNICAL_ERROR, ...) if the file cannot be written.
        """
        if not _is_valid_name(name):
            return ResultFailures.validation_error(
                f"Output name {name!r} must be non-empty, single-line and free of '<<'"
            )
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        return Result.from_computation(
            lambda: self._append(name, value, delimiter),
            ErrorCode.TECHNICAL_ERROR,
            f"Failed to write output {name!r} to {self._path}",
        )

    def _append(self, name: str, value: str, delimiter: str) -> str:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        log.info("output.published", name=name, chars=len(value))
        return name


def _is_valid_name(name: str) -> bool:
    # The name shares its line with the heredoc marker.
    return bool(name) and "\n" not in name and "\r" not in name and "<<" not in name
