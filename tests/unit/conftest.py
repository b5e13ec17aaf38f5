"""Shared fixtures for unit tests."""

from __future__ import annotations

import io
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import pytest

from sandboxkit.core.console import StatusReporter
from sandboxkit.core.subprocess_runner import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """CommandRunner that records commands and returns scripted results.

    Commands succeed unless a registered fragment appears in the command line.
    """

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.cwds: List[Optional[str]] = []
        self._scripted: List[Tuple[str, CommandResult]] = []

    def on(self, fragment: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        """Return the given result for commands containing ``fragment``."""
        self._scripted.append(
            (fragment, CommandResult(args=[], returncode=returncode, stdout=stdout, stderr=stderr))
        )

    def run(
        self,
        cmd: Sequence[str],
        cwd: Optional[Union[str, Path]] = None,
    ) -> CommandResult:
        args = [str(part) for part in cmd]
        self.calls.append(args)
        self.cwds.append(str(cwd) if cwd is not None else None)
        line = " ".join(args)
        for fragment, scripted in self._scripted:
            if fragment in line:
                return CommandResult(
                    args=args,
                    returncode=scripted.returncode,
                    stdout=scripted.stdout,
                    stderr=scripted.stderr,
                )
        return CommandResult(args=args, returncode=0)

    @property
    def command_lines(self) -> List[str]:
        return [" ".join(args) for args in self.calls]

    def ran(self, fragment: str) -> bool:
        return any(fragment in line for line in self.command_lines)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def status_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(status_stream: io.StringIO) -> StatusReporter:
    return StatusReporter(output=status_stream, color=False)
