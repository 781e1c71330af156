"""
Unit tests for domain models and command builders.

Covers suffix helpers, secret masking in SecurityCommand.display(),
and the exact argv produced for every `security` subcommand.
"""

from __future__ import annotations

import pytest

from ci_keychain.domain import commands
from ci_keychain.domain.models import (
    ProvisioningPolicy,
    ProvisionRequest,
    SecurityCommand,
    has_keychain_suffix,
    keychain_file_name,
)


class TestKeychainNames:
    def test_appends_suffix(self) -> None:
        assert keychain_file_name("ci-store") == "ci-store.keychain"

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("ci-store", False),
            ("ci-store.keychain", True),
            ("keychain", False),
            ("ci.keychain-db", False),
        ],
    )
    def test_detects_suffix(self, name: str, expected: bool) -> None:
        assert has_keychain_suffix(name) is expected


class TestProvisionRequest:
    def test_repr_hides_passwords(self) -> None:
        request = ProvisionRequest(
            keychain="ci-store",
            keychain_password="unlockme",
            p12_file_path="/tmp/cert.p12",
            p12_password="certpw",
        )

        text = repr(request)

        assert "unlockme" not in text
        assert "certpw" not in text
        assert "ci-store" in text

    def test_is_immutable(self) -> None:
        request = ProvisionRequest(
            keychain="ci-store", keychain_password="pw", p12_file_path="/tmp/c.p12"
        )
        with pytest.raises(AttributeError):
            request.keychain = "other"  # type: ignore[misc]


class TestProvisioningPolicyDefaults:
    def test_defaults_match_standard_ci_setup(self) -> None:
        policy = ProvisioningPolicy()

        assert policy.lock_timeout_seconds == 21600
        assert policy.trusted_applications == ("/usr/bin/codesign", "/usr/bin/security")
        assert policy.partition_list == "apple-tool:,apple:"
        assert policy.fallback_keychain == "login.keychain"
        assert policy.allow_empty_p12_password is True


class TestSecurityCommandDisplay:
    def test_masks_sensitive_arguments(self) -> None:
        command = SecurityCommand(
            args=("unlock-keychain", "-p", "hunter2", "ci.keychain"),
            sensitive=frozenset({2}),
        )

        assert command.display() == "unlock-keychain -p *** ci.keychain"
        assert command.verb == "unlock-keychain"

    def test_no_sensitive_arguments(self) -> None:
        command = SecurityCommand(args=("delete-keychain", "ci.keychain"))

        assert command.display() == "delete-keychain ci.keychain"


class TestCommandBuilders:
    """Every builder must produce the exact argv `security` expects."""

    def test_create_keychain(self) -> None:
        command = commands.create_keychain("ci.keychain", "pw")

        assert command.args == ("create-keychain", "-p", "pw", "ci.keychain")
        assert "pw" not in command.display()

    def test_set_keychain_settings(self) -> None:
        command = commands.set_keychain_settings("ci.keychain", 21600)

        assert command.args == ("set-keychain-settings", "-lut", "21600", "ci.keychain")

    def test_unlock_keychain(self) -> None:
        command = commands.unlock_keychain("ci.keychain", "pw")

        assert command.args == ("unlock-keychain", "-p", "pw", "ci.keychain")
        assert "pw" not in command.display()

    def test_import_pkcs12(self) -> None:
        command = commands.import_pkcs12(
            "ci.keychain", "/tmp/cert.p12", "certpw", ["/usr/bin/codesign", "/usr/bin/security"]
        )

        assert command.args == (
            "import", "/tmp/cert.p12", "-k", "ci.keychain", "-f", "pkcs12", "-A",
            "-T", "/usr/bin/codesign", "-T", "/usr/bin/security", "-P", "certpw",
        )
        assert command.display().endswith("-P ***")

    def test_import_pkcs12_with_empty_password(self) -> None:
        command = commands.import_pkcs12("ci.keychain", "/tmp/cert.p12", "", [])

        assert command.args[-2:] == ("-P", "")

    def test_set_key_partition_list(self) -> None:
        command = commands.set_key_partition_list("ci.keychain", "pw", "apple-tool:,apple:")

        assert command.args == (
            "set-key-partition-list", "-S", "apple-tool:,apple:", "-k", "pw", "ci.keychain",
        )
        assert "pw " not in command.display()
        assert "-k ***" in command.display()

    def test_list_keychains(self) -> None:
        command = commands.list_keychains("ci.keychain", "login.keychain")

        assert command.args == (
            "list-keychains", "-d", "user", "-s", "ci.keychain", "login.keychain",
        )

    def test_delete_keychain(self) -> None:
        command = commands.delete_keychain("ci.keychain")

        assert command.args == ("delete-keychain", "ci.keychain")
