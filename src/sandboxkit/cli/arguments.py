"""Argument parser construction for sandboxkit CLI.

This module builds the argument parser with subcommands:
- sandboxkit check          - Run the sandbox prerequisite check
- sandboxkit build-details  - Write build-details.txt
- sandboxkit validate       - Validate sandboxkit.yml
"""

from __future__ import annotations

import argparse


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show sandboxkit version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Reduce logging output to errors only.",
    )


def _add_project_options(parser: argparse.ArgumentParser) -> None:
    """Add options shared by commands that load the project configuration."""
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to a config file (default: sandboxkit.yml in the project).",
    )
    parser.add_argument(
        "-D",
        dest="properties",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help=(
            "Set a property, e.g. -D SANDBOX_SECRET_REPO_GIT_URL=git@host:repo.git. "
            "Properties take precedence over environment variables. Repeatable."
        ),
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory (default: current directory).",
    )


def _build_check_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'check' subcommand parser."""
    check_parser = subparsers.add_parser(
        "check",
        help="Run the sandbox prerequisite check.",
        description=(
            "Verify git/ssh access or the offline secret repo folder, clone or "
            "update the secret repo, generate config and deploy the web app secrets."
        ),
    )
    _add_project_options(check_parser)


def _build_build_details_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'build-details' subcommand parser."""
    details_parser = subparsers.add_parser(
        "build-details",
        help="Write build-details.txt into the compiled output.",
        description=(
            "Record project name, version, build time, builder and toolchain "
            "versions in the classes and resource directories."
        ),
    )
    details_parser.add_argument(
        "--name",
        help="Project name (default: project.name from config).",
    )
    details_parser.add_argument(
        "--project-version",
        help="Project version (default: project.version from config).",
    )
    details_parser.add_argument(
        "--classes-dir",
        metavar="DIR",
        help="Compiled classes directory (default: target/classes).",
    )
    details_parser.add_argument(
        "--resource-dir",
        metavar="DIR",
        help="Resource directory (default: src/main/resources).",
    )
    _add_project_options(details_parser)


def _build_validate_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'validate' subcommand parser."""
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a sandboxkit.yml configuration file.",
    )
    validate_parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to the config file to validate.",
    )
    validate_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory to search for sandboxkit.yml (default: current directory).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for sandboxkit CLI."""
    parser = argparse.ArgumentParser(
        prog="sandboxkit",
        description="sandboxkit - build details stamping and sandbox prerequisite checks.",
        epilog=(
            "Examples:\n"
            "  sandboxkit check                                   # Online mode\n"
            "  sandboxkit check -D SANDBOX_OFFLINE_SECRET_REPO_FOLDER=/opt\n"
            "  sandboxkit build-details --project-version 1.2.0\n"
            "  sandboxkit validate\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    _add_global_options(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands:",
        metavar="COMMAND",
    )

    _build_check_parser(subparsers)
    _build_build_details_parser(subparsers)
    _build_validate_parser(subparsers)

    return parser
