"""Operator-facing status output.

The prerequisite check reports each step as a yellow "Verifying ..." line
completed by "done." or a red "FAILED.". These lines are presentation only;
pass/fail decisions never depend on them.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from rich.console import Console


class StatusReporter:
    """Prints colored step status to a console."""

    def __init__(self, output: Optional[TextIO] = None, color: Optional[bool] = None):
        """Initialize StatusReporter.

        Args:
            output: Stream to write to (default: stdout).
            color: Force color on or off. None lets rich detect the terminal.
        """
        self._console = Console(
            file=output if output is not None else sys.stdout,
            force_terminal=color,
            no_color=color is False,
            highlight=False,
            soft_wrap=True,
        )

    def step(self, message: str) -> None:
        """Start a step; the line is completed by ``done`` or ``failed``."""
        self._console.print(message, style="yellow", end="", markup=False)

    def done(self, detail: str = "") -> None:
        """Complete the current step successfully."""
        text = f"done {detail}" if detail else "done."
        self._console.print(text, markup=False)

    def failed(self, message: str, hint: Optional[str] = None) -> None:
        """Complete the current step as failed and explain why."""
        self._console.print("FAILED.", style="red", markup=False)
        self.error(message, hint)

    def error(self, message: str, hint: Optional[str] = None) -> None:
        """Print an error explanation, followed by the corrective action."""
        self._console.print(message, style="red", markup=False)
        if hint:
            self._console.print(hint, style="red", markup=False)

    def notice(self, message: str) -> None:
        """Print a full informational line."""
        self._console.print(message, style="yellow", markup=False)

    def info(self, message: str) -> None:
        """Print an uncolored line."""
        self._console.print(message, markup=False)

    def output(self, text: str) -> None:
        """Echo captured command output, if any."""
        text = text.rstrip()
        if text:
            self._console.print(text, style="dim", markup=False)
