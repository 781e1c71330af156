"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables (CI secrets and step env)
  - Fall back to .env file for local runs
  - Validate types at startup
  - Keep passwords wrapped in SecretStr so they never show up in reprs

Only AppSettings is a BaseSettings instance. Sub-settings are plain BaseModel
classes populated via env_nested_delimiter="__", so KEYCHAIN__NAME maps to
keychain.name, CERTIFICATE__P12_FILE_PATH to certificate.p12_file_path, etc.

Emptiness of names, paths and passwords is deliberately NOT validated here:
the provisioning pipeline owns those checks so the same rules apply to
every caller.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ci_keychain.domain.models import (
    CODESIGN_PATH,
    DEFAULT_PARTITION_LIST,
    LOGIN_KEYCHAIN,
    SECURITY_PATH,
    SIX_HOURS_IN_SECONDS,
    ProvisioningPolicy,
    ProvisionRequest,
)

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class KeychainSettings(BaseModel):
    """The temporary keychain to create (or reuse) and its password."""

    name: str = Field(description="Keychain name without the .keychain suffix")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Password used to create, unlock and set the partition list",
    )
    setup: bool = Field(
        default=True,
        description="Create the keychain first; False assumes it already exists",
    )


class CertificateSettings(BaseModel):
    """The PKCS#12 signing bundle to import."""

    p12_file_path: str = Field(default="", description="Path to the .p12 bundle")
    p12_password: SecretStr = Field(
        default=SecretStr(""),
        description="Password protecting the .p12 bundle",
    )
    allow_empty_password: bool = Field(
        default=True,
        description="Accept an empty p12 password (bundles exported without one)",
    )


class SecurityToolSettings(BaseModel):
    """
    How the `security` tool is invoked and how the keychain is configured.

    The defaults match a disposable CI host. On longer-lived hosts, narrow
    trusted_applications to the tools that actually need the key.
    """

    executable: str = Field(default="security", description="security binary to run")
    trusted_applications: list[str] = Field(
        default_factory=lambda: [CODESIGN_PATH, SECURITY_PATH],
        description="Applications passed as -T on import",
    )
    lock_timeout_seconds: int = Field(default=SIX_HOURS_IN_SECONDS, ge=1)
    partition_list: str = Field(default=DEFAULT_PARTITION_LIST)
    fallback_keychain: str = Field(default=LOGIN_KEYCHAIN)

    @field_validator("partition_list")
    @classmethod
    def validate_partition_list(cls, value: str) -> str:
        """Each comma-separated entry must look like `name:` or `name:value`."""
        entries = [entry.strip() for entry in value.split(",")]
        bad = [entry for entry in entries if ":" not in entry or entry.startswith(":")]
        if bad:
            raise ValueError(
                f"Partition list entries must be of the form 'name:' or 'name:value', got {bad!r}"
            )
        return ",".join(entries)


class AppSettings(BaseSettings):
    """
    Root application settings — aggregates all sub-settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    keychain: KeychainSettings
    certificate: CertificateSettings = Field(default_factory=lambda: CertificateSettings())
    security: SecurityToolSettings = Field(default_factory=lambda: SecurityToolSettings())

    github_output: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_OUTPUT", "github_output"),
        description="File the GitHub Actions runner reads step outputs from",
    )
    output_name: str = Field(default="security-response")
    log_level: str = Field(default="INFO")

    def to_request(self) -> ProvisionRequest:
        return ProvisionRequest(
            keychain=self.keychain.name,
            keychain_password=self.keychain.password.get_secret_value(),
            p12_file_path=self.certificate.p12_file_path,
            p12_password=self.certificate.p12_password.get_secret_value(),
            setup_keychain=self.keychain.setup,
        )

    def to_policy(self) -> ProvisioningPolicy:
        return ProvisioningPolicy(
            trusted_applications=tuple(self.security.trusted_applications),
            lock_timeout_seconds=self.security.lock_timeout_seconds,
            partition_list=self.security.partition_list,
            fallback_keychain=self.security.fallback_keychain,
            allow_empty_p12_password=self.certificate.allow_empty_password,
        )
