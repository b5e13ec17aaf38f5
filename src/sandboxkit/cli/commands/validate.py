"""Validate command implementation.

Checks sandboxkit.yml and reports problems section by section, so an
operator can fix the config before ``sandboxkit check`` trips over it.
"""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from sandboxkit.config.models import SandboxKitConfig

from sandboxkit.cli.commands import Command
from sandboxkit.cli.exit_codes import EXIT_CHECK_FAILED, EXIT_INVALID_USAGE, EXIT_SUCCESS
from sandboxkit.config.loader import PROJECT_CONFIG_NAMES, find_project_config
from sandboxkit.config.validation import (
    ConfigValidationIssue,
    ValidationSeverity,
    validate_config_file,
)
from sandboxkit.core.console import StatusReporter

# Issues without a key (file level problems) are listed under this heading
FILE_SECTION = "file"


def group_by_section(issues: List[ConfigValidationIssue]) -> Dict[str, List[ConfigValidationIssue]]:
    """Group issues by the top-level config section their key belongs to."""
    grouped: Dict[str, List[ConfigValidationIssue]] = {}
    for issue in issues:
        section = issue.key.split(".", 1)[0] if issue.key else FILE_SECTION
        grouped.setdefault(section, []).append(issue)
    return grouped


class ValidateCommand(Command):
    """Validates sandboxkit.yml configuration files."""

    def __init__(self, reporter: Optional[StatusReporter] = None):
        self._reporter = reporter

    @property
    def name(self) -> str:
        """Command identifier."""
        return "validate"

    def execute(self, args: Namespace, config: "SandboxKitConfig | None" = None) -> int:
        """Execute the validate command.

        Returns:
            Exit code: 0 = valid, 1 = has errors, 3 = file not found.
        """
        reporter = self._reporter or StatusReporter()

        config_path = getattr(args, "config", None)
        if config_path:
            config_path = Path(config_path)
        else:
            config_path = find_project_config(Path(getattr(args, "path", ".")))

        if config_path is None:
            reporter.error(
                "No configuration file found.",
                f"Looked for: {', '.join(PROJECT_CONFIG_NAMES)}",
            )
            return EXIT_INVALID_USAGE

        if not config_path.exists():
            reporter.error(f"Configuration file not found: {config_path}")
            return EXIT_INVALID_USAGE

        reporter.step(f"Validating {config_path}...")
        is_valid, issues = validate_config_file(config_path)

        if not issues:
            reporter.done()
            reporter.info("Configuration is valid.")
            return EXIT_SUCCESS

        error_count = sum(1 for i in issues if i.severity == ValidationSeverity.ERROR)
        if is_valid:
            reporter.done()
        else:
            reporter.failed(f"{error_count} error(s) found.")

        for section, section_issues in group_by_section(issues).items():
            reporter.info(f"{section}:")
            for issue in section_issues:
                self._print_issue(reporter, issue)

        if not is_valid:
            reporter.error(f"Configuration is invalid ({error_count} error(s)).")
            return EXIT_CHECK_FAILED
        reporter.info(f"Configuration is valid with {len(issues)} warning(s).")
        return EXIT_SUCCESS

    def _print_issue(self, reporter: StatusReporter, issue: ConfigValidationIssue) -> None:
        line = f"  {issue.severity.value}: {issue.message}"
        if issue.severity == ValidationSeverity.ERROR:
            reporter.error(line)
        else:
            reporter.notice(line)
        if issue.suggestion:
            reporter.info(f"    Did you mean '{issue.suggestion}'?")
