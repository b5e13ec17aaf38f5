"""Configuration validation for sandboxkit.

Warns on unknown keys (with typo suggestions) and flags values of the
wrong type.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

import yaml

from sandboxkit.core.logging import get_logger

LOGGER = get_logger(__name__)


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Config will fail at runtime
    WARNING = "warning"  # Likely mistake but config usable


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None
    is_error: bool = False


@dataclass
class ConfigValidationIssue:
    """A validation issue for configuration with severity."""

    message: str
    source: str
    severity: ValidationSeverity
    key: Optional[str] = None
    suggestion: Optional[str] = None


VALID_TOP_LEVEL_KEYS: Set[str] = {
    "project",
    "properties",
    "sandbox",
    "build_details",
}

# Known keys per section; every value in these sections is a string
VALID_SECTION_KEYS: Dict[str, Set[str]] = {
    "project": {"name", "version"},
    "sandbox": {
        "web_app_secrets",
        "secret_repo_dir",
        "allowed_offline_folder",
        "app_base_dir",
    },
    "build_details": {"classes_dir", "resource_dir"},
}


def validate_config(
    data: Dict[str, Any],
    source: str,
) -> List[ConfigValidationWarning]:
    """Validate a configuration dictionary.

    Does not raise exceptions - returns warnings instead.

    Args:
        data: Config dictionary to validate.
        source: Source file path for warning messages.

    Returns:
        List of validation warnings.
    """
    warnings: List[ConfigValidationWarning] = []

    if not isinstance(data, dict):
        warnings.append(ConfigValidationWarning(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
            is_error=True,
        ))
        return warnings

    for key in data.keys():
        if key not in VALID_TOP_LEVEL_KEYS:
            _add(warnings, ConfigValidationWarning(
                message=f"Unknown top-level key '{key}'",
                source=source,
                key=key,
                suggestion=_suggest_key(key, VALID_TOP_LEVEL_KEYS),
            ))

    for section, valid_keys in VALID_SECTION_KEYS.items():
        section_data = data.get(section)
        if section_data is None:
            continue
        if not isinstance(section_data, dict):
            _add(warnings, ConfigValidationWarning(
                message=f"'{section}' must be a mapping, got {type(section_data).__name__}",
                source=source,
                key=section,
                is_error=True,
            ))
            continue

        for key, value in section_data.items():
            full_key = f"{section}.{key}"
            if key not in valid_keys:
                _add(warnings, ConfigValidationWarning(
                    message=f"Unknown key '{full_key}'",
                    source=source,
                    key=full_key,
                    suggestion=_suggest_key(key, valid_keys),
                ))
            elif value is not None and not isinstance(value, str):
                _add(warnings, ConfigValidationWarning(
                    message=f"'{full_key}' must be a string, got {type(value).__name__}",
                    source=source,
                    key=full_key,
                    is_error=True,
                ))

    properties = data.get("properties")
    if properties is not None:
        if not isinstance(properties, dict):
            _add(warnings, ConfigValidationWarning(
                message=f"'properties' must be a mapping, got {type(properties).__name__}",
                source=source,
                key="properties",
                is_error=True,
            ))
        else:
            for key, value in properties.items():
                if isinstance(value, (dict, list)):
                    _add(warnings, ConfigValidationWarning(
                        message=f"'properties.{key}' must be a scalar value",
                        source=source,
                        key=f"properties.{key}",
                        is_error=True,
                    ))

    return warnings


def _add(warnings: List[ConfigValidationWarning], warning: ConfigValidationWarning) -> None:
    warnings.append(warning)
    _log_warning(warning)


def _suggest_key(invalid_key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a valid key for a potential typo.

    Returns:
        Closest matching valid key, or None if no good match.
    """
    matches = get_close_matches(invalid_key, sorted(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_warning(warning: ConfigValidationWarning) -> None:
    msg = f"{warning.message} in {warning.source}"
    if warning.suggestion:
        msg += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(msg)


def validate_config_file(config_path: Path) -> Tuple[bool, List[ConfigValidationIssue]]:
    """Validate a configuration file from disk.

    Checks file existence, YAML syntax, and configuration semantics.

    Returns:
        Tuple of (is_valid, issues) where is_valid is False if any errors exist.
    """
    issues: List[ConfigValidationIssue] = []
    source = str(config_path)

    if not config_path.exists():
        issues.append(ConfigValidationIssue(
            message=f"Configuration file not found: {config_path}",
            source=source,
            severity=ValidationSeverity.ERROR,
        ))
        return False, issues

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        issues.append(ConfigValidationIssue(
            message=f"Invalid YAML syntax: {e}",
            source=source,
            severity=ValidationSeverity.ERROR,
        ))
        return False, issues

    if data is None:
        issues.append(ConfigValidationIssue(
            message="Configuration file is empty",
            source=source,
            severity=ValidationSeverity.WARNING,
        ))
        return True, issues

    for warning in validate_config(data, source):
        issues.append(ConfigValidationIssue(
            message=warning.message,
            source=warning.source,
            severity=ValidationSeverity.ERROR if warning.is_error else ValidationSeverity.WARNING,
            key=warning.key,
            suggestion=warning.suggestion,
        ))

    if isinstance(data, dict):
        sandbox = data.get("sandbox") or {}
        if isinstance(sandbox, dict) and not sandbox.get("web_app_secrets"):
            issues.append(ConfigValidationIssue(
                message="'sandbox.web_app_secrets' is not set; 'sandboxkit check' requires it",
                source=source,
                severity=ValidationSeverity.WARNING,
                key="sandbox.web_app_secrets",
            ))

    has_errors = any(issue.severity == ValidationSeverity.ERROR for issue in issues)
    return not has_errors, issues
