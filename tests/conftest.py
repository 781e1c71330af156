"""
Shared test fixtures for the ci-keychain test suite.

Provides a recording fake for the CommandRunner port so pipeline tests
can assert on exactly which `security` commands were issued, in which
order, without touching a real keychain.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest
from railway import ResultFailures
from railway.result import Result

from ci_keychain.domain.models import CommandOutput, ProvisionRequest, SecurityCommand


class RecordingRunner:
    """
    Fake CommandRunner.

    Records every command it is asked to run. Each verb succeeds with
    stdout "<verb> ok\\n" unless overridden; the verb named in `fail_on`
    fails with exit code 1 and `diagnostic` as stderr.
    """

    def __init__(
        self,
        stdout_by_verb: dict[str, str] | None = None,
        fail_on: str | None = None,
        diagnostic: str = "The specified keychain could not be found.",
    ) -> None:
        self.commands: list[SecurityCommand] = []
        self._stdout_by_verb = stdout_by_verb or {}
        self._fail_on = fail_on
        self._diagnostic = diagnostic

    @property
    def verbs(self) -> list[str]:
        return [command.verb for command in self.commands]

    def run(self, command: SecurityCommand) -> Result[CommandOutput]:
        self.commands.append(command)
        if command.verb == self._fail_on:
            return ResultFailures.command_error(
                ["security", *command.args], 1, self._diagnostic
            )
        stdout = self._stdout_by_verb.get(command.verb, f"{command.verb} ok\n")
        return Result.success(CommandOutput(command=command, stdout=stdout))


@pytest.fixture()
def make_runner() -> Callable[..., RecordingRunner]:
    """Factory for RecordingRunner instances with custom scripting."""
    return RecordingRunner


@pytest.fixture()
def runner() -> RecordingRunner:
    """A RecordingRunner on which every command succeeds."""
    return RecordingRunner()


@pytest.fixture()
def provision_request() -> ProvisionRequest:
    """A valid provisioning request that creates a fresh keychain."""
    return ProvisionRequest(
        keychain="ci-store",
        keychain_password="unlockme",
        p12_file_path="/tmp/cert.p12",
        p12_password="certpw",
        setup_keychain=True,
    )
