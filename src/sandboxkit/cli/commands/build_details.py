"""Build details command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sandboxkit.config.models import SandboxKitConfig

from sandboxkit.build_details import collect_build_details, save_build_details
from sandboxkit.cli.commands import Command
from sandboxkit.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from sandboxkit.core.logging import get_logger

LOGGER = get_logger(__name__)


class BuildDetailsCommand(Command):
    """Writes build-details.txt into the classes and resource directories."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "build-details"

    def execute(self, args: Namespace, config: "SandboxKitConfig | None" = None) -> int:
        """Execute the build-details command.

        CLI flags take precedence over the project configuration.

        Returns:
            Exit code (0 on success, 3 if the files cannot be written).
        """
        if config is None:
            LOGGER.error("build-details requires a loaded configuration")
            return EXIT_INVALID_USAGE

        name = getattr(args, "name", None) or config.project.name
        version = getattr(args, "project_version", None) or config.project.version or "Unknown"
        classes_dir = config.resolve_path(
            getattr(args, "classes_dir", None) or config.build_details.classes_dir
        )
        resource_dir = config.resolve_path(
            getattr(args, "resource_dir", None) or config.build_details.resource_dir
        )

        details = collect_build_details(name, version)
        try:
            written = save_build_details(details, classes_dir, resource_dir)
        except OSError as e:
            LOGGER.error(f"Failed to write build details: {e}")
            return EXIT_INVALID_USAGE

        print(f"Build details written to: {written[0]}")
        print(details.render())
        return EXIT_SUCCESS
