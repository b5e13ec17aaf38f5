"""Config generation and web app secrets deployment."""

from __future__ import annotations

import shutil
from enum import Enum
from pathlib import Path
from typing import List, Optional

from sandboxkit.core.console import StatusReporter
from sandboxkit.core.logging import get_logger
from sandboxkit.core.subprocess_runner import CommandRunner
from sandboxkit.sandbox.environment import (
    SECRET_REPO_OFFLINE_FOLDER_KEY,
    BootstrapMode,
    BootstrapModeKind,
)
from sandboxkit.sandbox.errors import (
    ConfigGenFailedError,
    CopyIOError,
    CopySourceMissingError,
)

LOGGER = get_logger(__name__)

CONF_DIR_NAME = "conf"
PLAYBOOK_TAG = "sandbox"


class DeployOutcome(str, Enum):
    """Result of deploying the web app secrets file."""

    COPIED = "copied"
    SKIPPED = "skipped"


def playbook_command(repo_dir: Path) -> List[str]:
    """Build the command that applies the sandbox playbook of the secret repo."""
    return [
        str(repo_dir / "gapply"),
        "-i", str(repo_dir / "inventory" / "sandbox"),
        str(repo_dir / "sandbox.yml"),
        "-t", PLAYBOOK_TAG,
    ]


def generate_config_files(
    mode: BootstrapMode,
    repo_dir: Path,
    runner: CommandRunner,
    reporter: StatusReporter,
    cwd: Optional[Path] = None,
) -> bool:
    """Run the config generation playbook in online mode.

    Returns:
        True if the playbook ran, False if the step was skipped.

    Raises:
        ConfigGenFailedError: If the playbook exits non-zero.
    """
    if mode.kind is BootstrapModeKind.OFFLINE:
        reporter.notice(
            f"Skipping the generate config files step because {SECRET_REPO_OFFLINE_FOLDER_KEY} is set."
        )
        return False

    cmd = playbook_command(repo_dir)
    reporter.info(f"Now generating the config with the following command: {' '.join(cmd)}")
    result = runner.run(cmd, cwd=cwd)
    reporter.output(result.stdout)
    if not result.ok:
        error = ConfigGenFailedError(
            f"Config generation failed (exit {result.returncode}): {result.stderr.strip()}",
        )
        reporter.error(error.message)
        raise error
    reporter.info("done.")
    return True


def deploy_web_app_secrets(
    secrets_filename: str,
    target_base_dir: Path,
    reporter: StatusReporter,
) -> DeployOutcome:
    """Copy the secrets file into ``<target_base_dir>/conf/`` unless it is there.

    Args:
        secrets_filename: Source secrets file, e.g. /opt/my-app/conf/myApp.conf.
        target_base_dir: Base directory of the web app using the sandbox.
        reporter: Status output.

    Returns:
        DeployOutcome.COPIED or DeployOutcome.SKIPPED.

    Raises:
        CopySourceMissingError: If the source file does not exist.
        CopyIOError: If the copy fails for any other reason.
    """
    source = Path(secrets_filename)
    target = target_base_dir / CONF_DIR_NAME / source.name

    if target.resolve().exists():
        reporter.notice(
            f"Web app secrets file {target} already exists - skipping deploy web app secrets step."
        )
        return DeployOutcome.SKIPPED

    reporter.step(f"Copying the web app secrets from {secrets_filename} to {target}...")
    if not source.is_file():
        error = CopySourceMissingError(
            f"The web app secrets file {secrets_filename} doesn't exist",
        )
        reporter.failed(error.message)
        raise error

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
    except OSError as e:
        error = CopyIOError(f"Failed to copy {secrets_filename} to {target}: {e}")
        reporter.failed(error.message)
        raise error from e

    reporter.done()
    LOGGER.info(f"Deployed web app secrets to {target}")
    return DeployOutcome.COPIED


def materialize_and_deploy(
    mode: BootstrapMode,
    repo_dir: Path,
    secrets_filename: str,
    target_base_dir: Path,
    runner: CommandRunner,
    reporter: StatusReporter,
    cwd: Optional[Path] = None,
) -> DeployOutcome:
    """Generate config (online only), then deploy the secrets file."""
    generate_config_files(mode, repo_dir, runner, reporter, cwd=cwd)
    return deploy_web_app_secrets(secrets_filename, target_base_dir, reporter)
