"""CLI runner orchestration.

This module handles command dispatch and execution for the sandboxkit CLI.
"""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Iterable, Optional

from importlib.metadata import version, PackageNotFoundError

from sandboxkit.cli.arguments import build_parser
from sandboxkit.cli.commands import Command
from sandboxkit.cli.commands.build_details import BuildDetailsCommand
from sandboxkit.cli.commands.check import CheckCommand
from sandboxkit.cli.commands.validate import ValidateCommand
from sandboxkit.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from sandboxkit.config.loader import ConfigError, load_config, parse_property_assignments
from sandboxkit.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def get_version() -> str:
    """Get sandboxkit version from package metadata or the package itself."""
    try:
        return version("sandboxkit")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from sandboxkit import __version__
        return __version__


class CLIRunner:
    """Orchestrates CLI execution with subcommand dispatch."""

    def __init__(self, check_cmd: Optional[CheckCommand] = None) -> None:
        self.parser = build_parser()
        self._version = get_version()
        self.check_cmd = check_cmd or CheckCommand()
        self.build_details_cmd = BuildDetailsCommand()
        self.validate_cmd = ValidateCommand()

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        # Handle --help specially to return 0
        if argv is not None:
            argv_list = list(argv)
            if argv_list in (["--help"], ["-h"]):
                self.parser.print_help()
                return EXIT_SUCCESS
        else:
            argv_list = None

        args = self.parser.parse_args(argv_list)

        configure_logging(
            debug=args.debug,
            verbose=args.verbose,
            quiet=args.quiet,
        )

        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        command = getattr(args, "command", None)

        if command == "check":
            return self._run_with_config(self.check_cmd, args)
        elif command == "build-details":
            return self._run_with_config(self.build_details_cmd, args)
        elif command == "validate":
            return self.validate_cmd.execute(args)
        else:
            self.parser.print_help()
            return EXIT_SUCCESS

    def _run_with_config(self, cmd: Command, args: Namespace) -> int:
        """Load the project configuration, then execute ``cmd``."""
        project_root = Path(args.path).resolve()
        config_path = Path(args.config) if getattr(args, "config", None) else None

        try:
            properties = parse_property_assignments(getattr(args, "properties", []) or [])
            config = load_config(
                project_root=project_root,
                cli_config_path=config_path,
                cli_overrides={"properties": properties} if properties else None,
            )
        except ConfigError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        return cmd.execute(args, config)
