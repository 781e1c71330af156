"""
Application entry points — wire dependencies and run one CI step.

Composition root: creates concrete adapters and injects them into the
pipeline. This is the ONLY place where concrete classes are instantiated.
Everything else depends on Protocol interfaces.

Two entry points, matching the two steps of a signing job:
  - main():    provision the keychain and publish the captured output
  - cleanup(): delete the keychain (run as the post-job step)

Responsibilities:
  1. Configure structlog
  2. Load and validate configuration from environment
  3. Create the `security` runner (and the GitHub output publisher)
  4. Run the pipeline and turn its Result into an exit status
"""

from __future__ import annotations

import logging
import sys
import time

import structlog
from railway import FailureDescription
from railway.result import Result

from ci_keychain import __version__
from ci_keychain.adapters.github_output import GithubOutputPublisher
from ci_keychain.adapters.security_cli import SecurityCommandRunner
from ci_keychain.config import AppSettings
from ci_keychain.pipeline import run_cleanup, run_provisioning


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured logging.

    Colored, human-readable console output; CI log viewers render it as is.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _load_settings() -> AppSettings:
    try:
        return AppSettings()
    except Exception as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)


def _create_runner(settings: AppSettings) -> SecurityCommandRunner:
    return SecurityCommandRunner(executable=settings.security.executable)


def _publish(settings: AppSettings, captured: str) -> Result[str]:
    """Hand the captured output to the CI runner, if it gave us somewhere to put it."""
    if settings.github_output is None:
        structlog.get_logger().info("output.skipped", reason="GITHUB_OUTPUT not set")
        return Result.success(settings.output_name)
    return GithubOutputPublisher(settings.github_output).set_output(
        settings.output_name, captured
    )


def _exit_on_failure(result: Result[str], operation: str, started: float) -> None:
    log = structlog.get_logger()
    elapsed = round(time.monotonic() - started, 3)

    def _fail(err: FailureDescription) -> None:
        log.error(
            "app.failed",
            operation=operation,
            code=err.code.value,
            error=err.message,
            elapsed_seconds=elapsed,
        )
        sys.exit(1)

    result.either(
        on_success=lambda _: log.info(
            "app.completed", operation=operation, elapsed_seconds=elapsed
        ),
        on_failure=_fail,
    )


def main() -> None:
    """Provision the temporary keychain and publish the `security` output."""
    settings = _load_settings()
    configure_structlog(settings.log_level)
    log = structlog.get_logger()

    log.info(
        "app.starting",
        version=__version__,
        operation="provision",
        keychain=settings.keychain.name,
        setup_keychain=settings.keychain.setup,
    )
    started = time.monotonic()

    result = run_provisioning(
        settings.to_request(),
        _create_runner(settings),
        settings.to_policy(),
    ).flat_map(lambda captured: _publish(settings, captured))

    _exit_on_failure(result, "provision", started)


def cleanup() -> None:
    """Delete the temporary keychain created by main()."""
    settings = _load_settings()
    configure_structlog(settings.log_level)
    log = structlog.get_logger()

    log.info(
        "app.starting",
        version=__version__,
        operation="cleanup",
        keychain=settings.keychain.name,
    )
    started = time.monotonic()

    result = run_cleanup(settings.keychain.name, _create_runner(settings))

    _exit_on_failure(result, "cleanup", started)


if __name__ == "__main__":
    main()
