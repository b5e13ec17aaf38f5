"""Check command implementation.

Runs the sandbox prerequisite check: validates tooling, syncs the secret
repo, generates config and deploys the web app secrets.
"""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING, Mapping, Optional

if TYPE_CHECKING:
    from sandboxkit.config.models import SandboxKitConfig

from sandboxkit.cli.commands import Command
from sandboxkit.cli.exit_codes import EXIT_CHECK_FAILED, EXIT_INVALID_USAGE, EXIT_SUCCESS
from sandboxkit.config.loader import ConfigError
from sandboxkit.core.console import StatusReporter
from sandboxkit.core.logging import get_logger
from sandboxkit.core.subprocess_runner import CommandRunner
from sandboxkit.sandbox.errors import SandboxError
from sandboxkit.sandbox.workflow import PrerequisitesCheck

LOGGER = get_logger(__name__)


class CheckCommand(Command):
    """Runs the sandbox prerequisite check for a project."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        reporter: Optional[StatusReporter] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._runner = runner
        self._reporter = reporter
        self._environ = environ

    @property
    def name(self) -> str:
        """Command identifier."""
        return "check"

    def execute(self, args: Namespace, config: "SandboxKitConfig | None" = None) -> int:
        """Execute the check command.

        Returns:
            0 on success, 1 if a prerequisite stage failed, 3 on configuration errors.
        """
        if config is None:
            LOGGER.error("check requires a loaded configuration")
            return EXIT_INVALID_USAGE

        reporter = self._reporter or StatusReporter()
        check = PrerequisitesCheck(
            config,
            runner=self._runner,
            reporter=reporter,
            environ=self._environ,
        )

        try:
            report = check.run()
        except ConfigError as e:
            reporter.error(str(e))
            return EXIT_INVALID_USAGE
        except SandboxError as e:
            LOGGER.error(f"Sandbox prerequisite check failed: {e.message}")
            return EXIT_CHECK_FAILED

        sync = report.sync_action.value if report.sync_action else "skipped"
        LOGGER.info(
            f"Prerequisite check passed: mode={report.mode.kind.value}, "
            f"repo={sync}, secrets={report.deploy_outcome.value}"
        )
        return EXIT_SUCCESS
