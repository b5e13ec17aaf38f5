"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sandboxkit.config.models import SandboxKitConfig


class Command(ABC):
    """Base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier."""

    @abstractmethod
    def execute(self, args: Namespace, config: "SandboxKitConfig | None" = None) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            config: Loaded configuration, if the command needs one.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


# ruff: noqa: E402
from sandboxkit.cli.commands.build_details import BuildDetailsCommand
from sandboxkit.cli.commands.check import CheckCommand
from sandboxkit.cli.commands.validate import ValidateCommand

__all__ = [
    "Command",
    "BuildDetailsCommand",
    "CheckCommand",
    "ValidateCommand",
]
