"""
Domain models — immutable values describing a provisioning run.

These are pure value objects with no behavior beyond formatting.
They describe WHAT should be done to the keychain; the `security`
command-line adapter is the only thing that turns them into side effects.

All models are frozen dataclasses (immutable) following functional principles.
"""

from __future__ import annotations

from dataclasses import dataclass, field

KEYCHAIN_SUFFIX = ".keychain"
LOGIN_KEYCHAIN = "login.keychain"

CODESIGN_PATH = "/usr/bin/codesign"
SECURITY_PATH = "/usr/bin/security"

SIX_HOURS_IN_SECONDS = 6 * 60 * 60
DEFAULT_PARTITION_LIST = "apple-tool:,apple:"

_MASK = "***"


def keychain_file_name(keychain: str) -> str:
    """Append the keychain suffix to a bare keychain name."""
    return f"{keychain}{KEYCHAIN_SUFFIX}"


def has_keychain_suffix(keychain: str) -> bool:
    return keychain.endswith(KEYCHAIN_SUFFIX)


@dataclass(frozen=True, slots=True)
class ProvisionRequest:
    """
    Caller-supplied parameters for a single provisioning run.

    `keychain` is the bare name; the `.keychain` suffix is appended
    by the pipeline. Passwords are excluded from repr so a request
    can be logged safely.
    """

    keychain: str
    keychain_password: str = field(repr=False)
    p12_file_path: str
    p12_password: str = field(default="", repr=False)
    setup_keychain: bool = True


@dataclass(frozen=True, slots=True)
class ProvisioningPolicy:
    """
    Tunables for how the keychain is configured.

    The defaults reproduce the standard CI setup: 6-hour auto-lock,
    codesign and security as trusted applications, the Apple tool
    partitions, and login.keychain kept as search-list fallback.

    `allow_empty_p12_password` exists because some bundles are exported
    without a password; set it to False to require one.

    `-A` on import lets any process that can reach the keychain use the
    imported key. That is only acceptable on single-use hosts; narrow
    `trusted_applications` elsewhere.
    """

    trusted_applications: tuple[str, ...] = (CODESIGN_PATH, SECURITY_PATH)
    lock_timeout_seconds: int = SIX_HOURS_IN_SECONDS
    partition_list: str = DEFAULT_PARTITION_LIST
    fallback_keychain: str = LOGIN_KEYCHAIN
    allow_empty_p12_password: bool = True


@dataclass(frozen=True, slots=True)
class SecurityCommand:
    """
    One invocation of the `security` tool, without the executable itself.

    `sensitive` holds the indices into `args` that carry secrets;
    `display()` masks them so the command can be logged.
    """

    args: tuple[str, ...]
    sensitive: frozenset[int] = frozenset()

    @property
    def verb(self) -> str:
        return self.args[0]

    def display(self) -> str:
        return " ".join(
            _MASK if index in self.sensitive else arg
            for index, arg in enumerate(self.args)
        )


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """Captured result of one completed `security` invocation."""

    command: SecurityCommand
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
