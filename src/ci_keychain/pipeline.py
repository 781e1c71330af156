"""
Pipeline — the core ROP pipeline provisioning a temporary keychain.

Domain layer — this is PURE ORCHESTRATION. No I/O of its own.
All `security` invocations go through the injected CommandRunner port.

The pipeline connects stages via flat_map, forming a railway:

  validate_request(request)
    → create-keychain + set-keychain-settings   (only when setup_keychain)
      → unlock-keychain
        → import (PKCS#12)
          → set-key-partition-list
            → list-keychains -d user -s

The value travelling along the success track is the captured stdout,
which grows by one command's output per stage. The first failing stage
short-circuits the rest; nothing already done is rolled back, so a
keychain created before the failure stays on the host until
run_cleanup removes it.
"""

from __future__ import annotations

from functools import partial

import structlog
from railway import ErrorCode
from railway.result import Result

from ci_keychain.domain import commands
from ci_keychain.domain.models import (
    KEYCHAIN_SUFFIX,
    ProvisioningPolicy,
    ProvisionRequest,
    SecurityCommand,
    has_keychain_suffix,
    keychain_file_name,
)
from ci_keychain.domain.ports import CommandRunner

log = structlog.get_logger()

_SUFFIX_MESSAGE = f"keychain name should not end in {KEYCHAIN_SUFFIX}"


def _validate_keychain_name(keychain: str) -> Result[str]:
    return Result.success(keychain).ensure(
        lambda name: not has_keychain_suffix(name),
        ErrorCode.VALIDATION_ERROR,
        _SUFFIX_MESSAGE,
    )


def validate_request(
    request: ProvisionRequest,
    policy: ProvisioningPolicy,
) -> Result[ProvisionRequest]:
    """
    Check every precondition before any command is issued.

    Checks run in a fixed order and the first violation wins:
      1. keychain name has no .keychain suffix
      2. p12 file path is non-empty
      3. p12 password is non-empty (only if the policy forbids empty ones)
      4. keychain password is non-empty
    """
    return (
        _validate_keychain_name(request.keychain)
        .map(lambda _: request)
        .ensure(
            lambda r: r.p12_file_path != "",
            ErrorCode.VALIDATION_ERROR,
            "p12 file path must not be empty",
        )
        .ensure(
            lambda r: policy.allow_empty_p12_password or r.p12_password != "",
            ErrorCode.VALIDATION_ERROR,
            "p12 password must not be empty",
        )
        .ensure(
            lambda r: r.keychain_password != "",
            ErrorCode.VALIDATION_ERROR,
            "keychain password must not be empty",
        )
    )


def provisioning_commands(
    request: ProvisionRequest,
    policy: ProvisioningPolicy,
) -> list[SecurityCommand]:
    """
    The ordered `security` commands for a validated request.

    Six commands when setup_keychain is set, four when the keychain
    is assumed to exist already.
    """
    keychain = keychain_file_name(request.keychain)
    steps: list[SecurityCommand] = []
    if request.setup_keychain:
        steps.append(commands.create_keychain(keychain, request.keychain_password))
        steps.append(commands.set_keychain_settings(keychain, policy.lock_timeout_seconds))
    steps.append(commands.unlock_keychain(keychain, request.keychain_password))
    steps.append(
        commands.import_pkcs12(
            keychain,
            request.p12_file_path,
            request.p12_password,
            policy.trusted_applications,
        )
    )
    steps.append(
        commands.set_key_partition_list(
            keychain, request.keychain_password, policy.partition_list
        )
    )
    steps.append(commands.list_keychains(keychain, policy.fallback_keychain))
    return steps


def _run_and_capture(
    runner: CommandRunner,
    command: SecurityCommand,
    captured: str,
) -> Result[str]:
    """Run one command and append its stdout to what has been captured so far."""
    log.info("provision.step", verb=command.verb)
    return runner.run(command).map(lambda output: captured + output.stdout)


def _run_all(
    request: ProvisionRequest,
    runner: CommandRunner,
    policy: ProvisioningPolicy,
) -> Result[str]:
    result: Result[str] = Result.success("")
    for command in provisioning_commands(request, policy):
        result = result.flat_map(partial(_run_and_capture, runner, command))
    return result


def run_provisioning(
    request: ProvisionRequest,
    runner: CommandRunner,
    policy: ProvisioningPolicy | None = None,
) -> Result[str]:
    """
    Provision a temporary keychain and install the signing certificate.

    Flow:
      1. Validate the request (no command is issued on failure)
      2. Create the keychain and set a 6-hour auto-lock (if setup_keychain)
      3. Unlock it
      4. Import the PKCS#12 bundle with codesign/security as trusted apps
      5. Grant the apple-tool/apple partitions non-interactive key access
      6. Put it first in the user search list, login.keychain second

    Returns Result[str] with the concatenated stdout of every command
    issued, or the failure from the first failing step unchanged.
    """
    policy = policy or ProvisioningPolicy()
    log.info(
        "provision.starting",
        keychain=keychain_file_name(request.keychain),
        setup_keychain=request.setup_keychain,
    )
    return (
        validate_request(request, policy)
        .flat_map(lambda valid: _run_all(valid, runner, policy))
        .peek(lambda output: log.info("provision.completed", captured_chars=len(output)))
        .peek_failure(
            lambda err: log.error("provision.failed", code=err.code.value, error=err.message)
        )
    )


def run_cleanup(keychain: str, runner: CommandRunner) -> Result[str]:
    """
    Delete a keychain previously created by run_provisioning.

    Issues a single `delete-keychain`. The user search list is left
    as is; the deleted entry simply stops resolving.

    Returns Result[str] with the deleted keychain file name.
    """
    return (
        _validate_keychain_name(keychain)
        .map(keychain_file_name)
        .flat_map(
            lambda name: runner.run(commands.delete_keychain(name)).map(lambda _: name)
        )
        .peek(lambda deleted: log.info("cleanup.completed", keychain=deleted))
        .peek_failure(
            lambda err: log.error("cleanup.failed", code=err.code.value, error=err.message)
        )
    )
