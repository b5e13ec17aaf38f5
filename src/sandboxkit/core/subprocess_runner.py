"""External command execution.

Every git, ssh and playbook invocation goes through a ``CommandRunner`` so
the prerequisite check can be exercised without real subprocesses.
"""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from sandboxkit.core.logging import get_logger

LOGGER = get_logger(__name__)

# Conventional shell exit statuses for commands that never started.
EXIT_COMMAND_NOT_FOUND = 127
EXIT_COMMAND_NOT_EXECUTABLE = 126


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single external command."""

    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """True when the command exited with status 0."""
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        """The command as a single display string."""
        return " ".join(self.args)


class CommandRunner(ABC):
    """Runs an external command and reports its exit code and output."""

    @abstractmethod
    def run(
        self,
        cmd: Sequence[str],
        cwd: Optional[Union[str, Path]] = None,
    ) -> CommandResult:
        """Run a command to completion.

        Args:
            cmd: Command and arguments to run.
            cwd: Working directory for the command (default: current directory).

        Returns:
            CommandResult with the exit code and captured output. A command
            that cannot be started is reported as a failed result, not raised.
        """


class SubprocessRunner(CommandRunner):
    """CommandRunner backed by ``subprocess.run``.

    Blocks until the command exits. No timeout is applied unless one is
    given explicitly.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._timeout = timeout

    def run(
        self,
        cmd: Sequence[str],
        cwd: Optional[Union[str, Path]] = None,
    ) -> CommandResult:
        args = [str(part) for part in cmd]
        LOGGER.debug(f"Running: {' '.join(args)} (cwd={cwd or '.'})")

        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=str(cwd) if cwd is not None else None,
                timeout=self._timeout,
            )
        except FileNotFoundError as e:
            LOGGER.debug(f"Command not found: {args[0]}")
            return CommandResult(
                args=args,
                returncode=EXIT_COMMAND_NOT_FOUND,
                stderr=str(e),
            )
        except OSError as e:
            # Permission denied, exec format error and the like
            LOGGER.debug(f"Command could not be started: {args[0]}: {e}")
            return CommandResult(
                args=args,
                returncode=EXIT_COMMAND_NOT_EXECUTABLE,
                stderr=str(e),
            )

        LOGGER.debug(f"{args[0]} exited with {completed.returncode}")
        return CommandResult(
            args=args,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
