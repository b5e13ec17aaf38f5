"""Prerequisite validation for the sandbox secret repository.

If SANDBOX_OFFLINE_SECRET_REPO_FOLDER is not set, the secret repository will
be cloned from git later in the run, so we check that:

1. git is installed
2. SANDBOX_SECRET_REPO_GIT_URL is set, e.g. git@gitlab.example.com:team/secrets.git
3. ssh access to the git host part of that URL works (``ssh -T git@<host>``)

If the offline folder is set, it must exist and be exactly the allowed folder.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from sandboxkit.core.console import StatusReporter
from sandboxkit.core.logging import get_logger
from sandboxkit.core.subprocess_runner import CommandRunner
from sandboxkit.sandbox.environment import (
    SECRET_REPO_GIT_URL_KEY,
    SECRET_REPO_OFFLINE_FOLDER_KEY,
    BootstrapMode,
    BootstrapSettings,
    OfflineMode,
    OnlineMode,
)
from sandboxkit.sandbox.errors import (
    ConnectivityError,
    FolderNotFoundError,
    MalformedLocatorError,
    MissingConfigError,
    PolicyViolationError,
    PrerequisiteError,
    ToolMissingError,
)

LOGGER = get_logger(__name__)

DEFAULT_ALLOWED_OFFLINE_FOLDER = "/opt"
GIT_HOST_PREFIX = "git@"


def extract_git_host(git_url: str) -> str:
    """Extract the host from an scp-style git URL.

    git@gitlab.example.com:team/secrets.git -> gitlab.example.com

    Raises:
        MalformedLocatorError: If the URL lacks the ``git@`` prefix, the ``:``
            separator, or a host between them.
    """
    start = git_url.find(GIT_HOST_PREFIX)
    if start == -1:
        raise MalformedLocatorError(
            f"Cannot find '{GIT_HOST_PREFIX}' in {SECRET_REPO_GIT_URL_KEY}={git_url}",
            hint="Expected a URL like git@git-host:theSecretRepoProjectName",
        )
    start += len(GIT_HOST_PREFIX)
    end = git_url.find(":", start)
    if end == -1 or end == start:
        raise MalformedLocatorError(
            f"Cannot find a git host in {SECRET_REPO_GIT_URL_KEY}={git_url}",
            hint="Expected a URL like git@git-host:theSecretRepoProjectName",
        )
    return git_url[start:end]


def validate_prerequisites(
    settings: BootstrapSettings,
    runner: CommandRunner,
    reporter: StatusReporter,
    allowed_offline_folder: str = DEFAULT_ALLOWED_OFFLINE_FOLDER,
) -> BootstrapMode:
    """Validate the prerequisites for the mode the settings select.

    Args:
        settings: Resolved bootstrap settings.
        runner: Runner for the git and ssh checks.
        reporter: Status output.
        allowed_offline_folder: The only folder accepted in offline mode.

    Returns:
        The validated OnlineMode or OfflineMode.

    Raises:
        PrerequisiteError: On the first failing check.
    """
    if settings.offline_folder is not None:
        return _validate_offline(settings.offline_folder, reporter, allowed_offline_folder)

    reporter.notice(
        f"{SECRET_REPO_OFFLINE_FOLDER_KEY} has not been set so we will now verify we can "
        "connect to the Git secret repo for later cloning..."
    )
    _validate_git_installed(runner, reporter)
    git_url = _validate_git_url(settings.git_url, reporter)
    git_host = _validate_can_ssh(git_url, runner, reporter)
    return OnlineMode(git_url=git_url, git_host=git_host)


def _fail(reporter: StatusReporter, error: PrerequisiteError) -> PrerequisiteError:
    reporter.failed(error.message, error.hint)
    LOGGER.debug(f"Prerequisite check failed: {error.message}")
    return error


def _validate_git_installed(runner: CommandRunner, reporter: StatusReporter) -> None:
    reporter.step("Verifying git is installed...")
    result = runner.run(["git", "--version"])
    if not result.ok:
        raise _fail(reporter, ToolMissingError(
            "You don't have git installed. Please install git and try again",
        ))
    reporter.done()


def _validate_git_url(git_url: Optional[str], reporter: StatusReporter) -> str:
    reporter.step(f"Verifying {SECRET_REPO_GIT_URL_KEY} is passed...")
    if git_url is None:
        raise _fail(reporter, MissingConfigError(
            f'There is no "{SECRET_REPO_GIT_URL_KEY}" set neither as env variable nor as property',
            hint=(
                f"Please set it either as a property "
                f"-D {SECRET_REPO_GIT_URL_KEY}='git@git-host:theSecretRepoProjectName' "
                f"or export it in the environment with "
                f"export {SECRET_REPO_GIT_URL_KEY}='git@git-host:theSecretRepoProjectName'"
            ),
        ))
    reporter.done(f"set to {git_url}")
    return git_url


def _validate_can_ssh(git_url: str, runner: CommandRunner, reporter: StatusReporter) -> str:
    try:
        git_host = extract_git_host(git_url)
    except MalformedLocatorError as e:
        reporter.error(e.message, e.hint)
        raise

    reporter.step(f"Verifying there is ssh access to {git_host}...")
    result = runner.run(["ssh", "-T", f"{GIT_HOST_PREFIX}{git_host}"])
    if not result.ok:
        raise _fail(reporter, ConnectivityError(
            f"Cannot connect to {GIT_HOST_PREFIX}{git_host}. "
            f"Please check your ssh connection to {git_host}.",
            hint=f"You might need to import your public key to {git_host}",
        ))
    reporter.done()
    return git_host


def _validate_offline(
    folder: str,
    reporter: StatusReporter,
    allowed_offline_folder: str,
) -> OfflineMode:
    reporter.notice(
        f"There is an offline folder {SECRET_REPO_OFFLINE_FOLDER_KEY}={folder} "
        "defined to be used as a secret repo."
    )
    reporter.step(f"Verifying that {folder} exists and is set correctly...")

    if not Path(folder).exists():
        raise _fail(reporter, FolderNotFoundError(
            f"The offline secret repo folder {folder} doesn't exist",
        ))
    # Exact match only: a different clone of the repo is still rejected.
    if folder != allowed_offline_folder:
        raise _fail(reporter, PolicyViolationError(
            f"The offline secret repo folder is set to {folder}. "
            f"If you are going to set it, it must be set to {allowed_offline_folder}",
        ))
    reporter.done()
    return OfflineMode(folder=folder)
