"""The sandbox prerequisite check as a whole.

Stages run strictly in order and the first failure aborts the run:

1. resolve the bootstrap settings
2. validate prerequisites for the selected mode
3. clone or pull the secret repo (online only)
4. generate config (online only) and deploy the web app secrets
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from sandboxkit.config.loader import ConfigError
from sandboxkit.config.models import SandboxKitConfig
from sandboxkit.core.console import StatusReporter
from sandboxkit.core.logging import get_logger
from sandboxkit.core.subprocess_runner import CommandRunner, SubprocessRunner
from sandboxkit.sandbox.deploy import DeployOutcome, materialize_and_deploy
from sandboxkit.sandbox.environment import (
    BootstrapMode,
    OnlineMode,
    resolve_bootstrap_settings,
)
from sandboxkit.sandbox.prerequisites import validate_prerequisites
from sandboxkit.sandbox.repository import SyncAction, sync_secret_repo

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CheckReport:
    """What a successful prerequisite check did."""

    mode: BootstrapMode
    sync_action: Optional[SyncAction]
    deploy_outcome: DeployOutcome


class PrerequisitesCheck:
    """Runs the sandbox prerequisite check for one project."""

    def __init__(
        self,
        config: SandboxKitConfig,
        runner: Optional[CommandRunner] = None,
        reporter: Optional[StatusReporter] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize PrerequisitesCheck.

        Args:
            config: Loaded project configuration.
            runner: Runner for external commands (default: real subprocesses).
            reporter: Status output (default: stdout).
            environ: Environment mapping (default: os.environ).
        """
        self._config = config
        self._runner = runner or SubprocessRunner()
        self._reporter = reporter or StatusReporter()
        self._environ = os.environ if environ is None else environ

    def run(self) -> CheckReport:
        """Run all stages.

        Raises:
            ConfigError: If no web app secrets file is configured.
            SandboxError: On the first failing stage.
        """
        secrets_filename = self._config.sandbox.web_app_secrets
        if not secrets_filename:
            raise ConfigError(
                "'sandbox.web_app_secrets' is not configured, e.g. /opt/my-app/conf/myApp.conf"
            )

        settings = resolve_bootstrap_settings(self._config.properties, self._environ)
        LOGGER.info(f"Running prerequisite check in {settings.kind.value} mode")

        mode = validate_prerequisites(
            settings,
            self._runner,
            self._reporter,
            allowed_offline_folder=self._config.sandbox.allowed_offline_folder,
        )

        repo_dir = self._config.secret_repo_path
        sync_action: Optional[SyncAction] = None
        if isinstance(mode, OnlineMode):
            sync_action = sync_secret_repo(repo_dir, mode.git_url, self._runner, self._reporter)

        outcome = materialize_and_deploy(
            mode,
            repo_dir,
            secrets_filename,
            self._config.app_base_path,
            self._runner,
            self._reporter,
            cwd=self._config.project_root,
        )
        return CheckReport(mode=mode, sync_action=sync_action, deploy_outcome=outcome)
