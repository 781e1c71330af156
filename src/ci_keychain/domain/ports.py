"""
Ports — Protocol-based interfaces for infrastructure adapters.

These define WHAT the provisioning pipeline needs (contracts) without
specifying HOW it's done (implementation). Following hexagonal architecture:

  Domain ← Ports (protocols) ← Adapters (implementations)

Each port is a Protocol (structural typing) so adapters satisfy
the contract simply by implementing the methods — no inheritance.
Tests substitute recording fakes for both.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from railway.result import Result

from ci_keychain.domain.models import CommandOutput, SecurityCommand


@runtime_checkable
class CommandRunner(Protocol):
    """
    Port: execute one `security` command and capture its output.

    Blocks until the command completes. No timeout, no retry.

    Returns Result[CommandOutput] on a zero exit status. A non-zero exit
    becomes Failure(COMMAND_ERROR) whose message carries the tool's
    diagnostic; a command that cannot be started becomes
    Failure(TECHNICAL_ERROR).
    """

    def run(self, command: SecurityCommand) -> Result[CommandOutput]: ...


@runtime_checkable
class OutputPublisher(Protocol):
    """
    Port: hand a named value back to the surrounding CI pipeline.

    Returns Result[str] with the output name on success.
    """

    def set_output(self, name: str, value: str) -> Result[str]: ...
