"""
Command builders — argv for each `security` subcommand the pipeline issues.

Pure functions: each returns a SecurityCommand and has no side effects.
Every argument that carries a password is flagged as sensitive so the
runner can log the command without leaking it.

Keychain arguments are always full file names (with the .keychain suffix).
"""

from __future__ import annotations

from collections.abc import Iterable

from ci_keychain.domain.models import SecurityCommand


def _command(*args: str, sensitive: Iterable[int] = ()) -> SecurityCommand:
    return SecurityCommand(args=tuple(args), sensitive=frozenset(sensitive))


def create_keychain(keychain: str, password: str) -> SecurityCommand:
    return _command("create-keychain", "-p", password, keychain, sensitive=[2])


def set_keychain_settings(keychain: str, lock_timeout_seconds: int) -> SecurityCommand:
    """Lock automatically after `lock_timeout_seconds` of inactivity (-l locks on sleep too)."""
    return _command("set-keychain-settings", "-lut", str(lock_timeout_seconds), keychain)


def unlock_keychain(keychain: str, password: str) -> SecurityCommand:
    return _command("unlock-keychain", "-p", password, keychain, sensitive=[2])


def import_pkcs12(
    keychain: str,
    p12_file_path: str,
    p12_password: str,
    trusted_applications: Iterable[str],
) -> SecurityCommand:
    """
    Import a PKCS#12 bundle into `keychain`.

    -A allows any application to read the imported keys. That would be
    insecure on a keychain that is kept around; CI hosts are discarded
    after the run. Each -T additionally registers a trusted application.
    """
    args = ["import", p12_file_path, "-k", keychain, "-f", "pkcs12", "-A"]
    for application in trusted_applications:
        args += ["-T", application]
    args += ["-P", p12_password]
    return _command(*args, sensitive=[len(args) - 1])


def set_key_partition_list(keychain: str, password: str, partition_list: str) -> SecurityCommand:
    return _command(
        "set-key-partition-list", "-S", partition_list, "-k", password, keychain,
        sensitive=[4],
    )


def list_keychains(keychain: str, fallback_keychain: str) -> SecurityCommand:
    """Replace the user search list with `keychain` first, `fallback_keychain` second."""
    return _command("list-keychains", "-d", "user", "-s", keychain, fallback_keychain)


def delete_keychain(keychain: str) -> SecurityCommand:
    return _command("delete-keychain", keychain)
