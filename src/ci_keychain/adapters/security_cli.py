"""
`security` CLI adapter — runs keychain administration commands via subprocess.

Adapter layer — implements the CommandRunner port on top of the macOS
`security` tool.

Each command is run to completion with stdout/stderr captured as text.
There is no shell, no timeout and no retry: a hanging command hangs the run.

Exit status mapping:
  0            → Result.success(CommandOutput)
  non-zero     → Result.failure(COMMAND_ERROR, "<tool> <verb> failed with exit code N: <stderr>")
  spawn error  → Result.failure(TECHNICAL_ERROR, ...) with the OSError attached

Only SecurityCommand.display() is ever logged, so passwords stay out of logs.
"""

from __future__ import annotations

import subprocess

import structlog
from railway import ErrorCode, ResultFailures
from railway.result import Result

from ci_keychain.domain.models import CommandOutput, SecurityCommand

log = structlog.get_logger()


class SecurityCommandRunner:
    """
    Execute `security` subcommands and capture their output.

    Implements the CommandRunner port.
    """

    def __init__(self, executable: str = "security") -> None:
        self._executable = executable

    def run(self, command: SecurityCommand) -> Result[CommandOutput]:
        """
        Run `security <args>` and wait for it.

        Returns Result[CommandOutput] on exit status 0,
        Result.failure(COMMAND_ERROR, ...) on a non-zero exit,
        or Result.failure(TECHNICAL_ERROR, ...) if the process cannot start.
        """
        argv = [self._executable, *command.args]
        log.info("security.command", command=f"{self._executable} {command.display()}")
        return Result.from_computation(
            lambda: self._spawn(argv),
            ErrorCode.TECHNICAL_ERROR,
            f"Failed to launch {self._executable} {command.verb}",
        ).flat_map(lambda completed: self._check_exit(command, argv, completed))

    def _spawn(self, argv: list[str]) -> subprocess.CompletedProcess[str]:
        """Blocking spawn — OSError is caught by from_computation."""
        return subprocess.run(argv, capture_output=True, text=True, check=False)

    def _check_exit(
        self,
        command: SecurityCommand,
        argv: list[str],
        completed: subprocess.CompletedProcess[str],
    ) -> Result[CommandOutput]:
        stdout = completed.stdout or ""
        stderr = completed.stderr or ""
        if completed.returncode != 0:
            log.error(
                "security.command_failed",
                verb=command.verb,
                exit_code=completed.returncode,
            )
            return ResultFailures.command_error(argv, completed.returncode, stderr or stdout)
        log.info("security.command_completed", verb=command.verb, stdout_chars=len(stdout))
        return Result.success(
            CommandOutput(
                command=command,
                stdout=stdout,
                stderr=stderr,
                exit_code=completed.returncode,
            )
        )
