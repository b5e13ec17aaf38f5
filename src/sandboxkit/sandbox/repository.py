"""Clone or update the secret repository working copy."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from sandboxkit.core.console import StatusReporter
from sandboxkit.core.logging import get_logger
from sandboxkit.core.subprocess_runner import CommandRunner
from sandboxkit.sandbox.errors import CloneFailedError, PullFailedError

LOGGER = get_logger(__name__)

# The only supported branch of the secret repository.
GIT_BRANCH = "include_secrets_trunc"

GIT_DIR_NAME = ".git"


class SyncAction(str, Enum):
    """What the synchronizer did to the working copy."""

    CLONED = "cloned"
    PULLED = "pulled"


def is_git_working_copy(path: Path) -> bool:
    """Check whether ``path`` already holds a cloned repository."""
    return (path / GIT_DIR_NAME).exists()


def sync_secret_repo(
    working_dir: Path,
    git_url: str,
    runner: CommandRunner,
    reporter: StatusReporter,
    branch: str = GIT_BRANCH,
) -> SyncAction:
    """Pull ``branch`` into an existing working copy, or clone it fresh.

    Args:
        working_dir: Local directory for the secret repository.
        git_url: Remote to clone from.
        runner: Runner for the git commands.
        reporter: Status output.
        branch: Branch to pull or clone.

    Returns:
        SyncAction.PULLED or SyncAction.CLONED.

    Raises:
        PullFailedError: If ``git pull`` fails.
        CloneFailedError: If ``git clone`` fails.
    """
    local_path = working_dir.resolve()

    if is_git_working_copy(local_path):
        cmd = [
            "git",
            "--work-tree", str(local_path),
            "--git-dir", str(local_path / GIT_DIR_NAME),
            "pull", "origin", branch,
        ]
        LOGGER.info(f"Updating secret repo in {local_path} from origin/{branch}")
        result = runner.run(cmd)
        reporter.output(result.stdout)
        if not result.ok:
            error = PullFailedError(
                f"Failed to pull {branch} into {local_path} (exit {result.returncode}): "
                f"{result.stderr.strip()}",
            )
            reporter.error(error.message)
            raise error
        reporter.info("done.")
        return SyncAction.PULLED

    cmd = ["git", "clone", "-b", branch, git_url, str(local_path)]
    reporter.info(f"Now going to run the following command: {' '.join(cmd)}")
    try:
        local_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        error = CloneFailedError(f"Cannot create {local_path.parent} for the clone: {e}")
        reporter.error(error.message)
        raise error from e
    result = runner.run(cmd)
    reporter.output(result.stdout)
    if not result.ok:
        error = CloneFailedError(
            f"Failed to clone {git_url} (branch {branch}) into {local_path} "
            f"(exit {result.returncode}): {result.stderr.strip()}",
        )
        reporter.error(error.message)
        raise error
    reporter.info("done.")
    return SyncAction.CLONED
