"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Project-level config (sandboxkit.yml)
- Environment variable expansion (${VAR})
- CLI overrides, including -D properties
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from sandboxkit.config.models import (
    BuildDetailsConfig,
    ProjectConfig,
    SandboxConfig,
    SandboxKitConfig,
)
from sandboxkit.config.validation import validate_config
from sandboxkit.core.logging import get_logger

LOGGER = get_logger(__name__)

PROJECT_CONFIG_NAMES = [".sandboxkit.yml", ".sandboxkit.yaml", "sandboxkit.yml", "sandboxkit.yaml"]

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


def load_config(
    project_root: Path,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> SandboxKitConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path) OR project config (sandboxkit.yml)
    3. Built-in defaults

    Raises:
        ConfigError: If the given config file doesn't exist, can't be parsed
            or holds values of the wrong type.
    """
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        config_path: Optional[Path] = cli_config_path
        label = "custom"
    else:
        config_path = find_project_config(project_root)
        label = "project"

    if config_path is not None:
        try:
            file_dict = load_yaml_file(config_path)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        errors = [w for w in validate_config(file_dict, source=str(config_path)) if w.is_error]
        if errors:
            details = "; ".join(w.message for w in errors)
            raise ConfigError(f"Invalid configuration in {config_path}: {details}")
        merged = merge_configs(merged, file_dict)
        sources.append(f"{label}:{config_path}")
        LOGGER.debug(f"Loaded {label} config from {config_path}")

    if cli_overrides:
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged, project_root)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find the first existing config file name in the project root."""
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.exists():
            return config_path
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in string values."""
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Dicts merge recursively; anything else in overlay replaces base.
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def parse_property_assignments(assignments: List[str]) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` strings from repeated -D flags.

    Raises:
        ConfigError: If an assignment has no '=' or an empty key.
    """
    properties: Dict[str, str] = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigError(f"Invalid property '{assignment}', expected KEY=VALUE")
        properties[key] = value
    return properties


def _as_str(value: Any, default: str) -> str:
    if value is None:
        return default
    return str(value)


def dict_to_config(data: Dict[str, Any], project_root: Path) -> SandboxKitConfig:
    """Convert a merged config dict to a typed SandboxKitConfig.

    Raises:
        ConfigError: If a section has the wrong shape.
    """
    for section in ("project", "properties", "sandbox", "build_details"):
        if not isinstance(data.get(section, {}), dict):
            raise ConfigError(f"'{section}' must be a mapping")

    project_data = data.get("project", {})
    project = ProjectConfig(
        name=_as_str(project_data.get("name"), project_root.resolve().name),
        version=_as_str(project_data.get("version"), ""),
    )

    properties = {str(k): _as_str(v, "") for k, v in data.get("properties", {}).items()}

    sandbox_data = data.get("sandbox", {})
    defaults = SandboxConfig()
    web_app_secrets = sandbox_data.get("web_app_secrets")
    sandbox = SandboxConfig(
        web_app_secrets=str(web_app_secrets) if web_app_secrets else None,
        secret_repo_dir=_as_str(sandbox_data.get("secret_repo_dir"), defaults.secret_repo_dir),
        allowed_offline_folder=_as_str(
            sandbox_data.get("allowed_offline_folder"), defaults.allowed_offline_folder
        ),
        app_base_dir=_as_str(sandbox_data.get("app_base_dir"), defaults.app_base_dir),
    )

    details_data = data.get("build_details", {})
    details_defaults = BuildDetailsConfig()
    build_details = BuildDetailsConfig(
        classes_dir=_as_str(details_data.get("classes_dir"), details_defaults.classes_dir),
        resource_dir=_as_str(details_data.get("resource_dir"), details_defaults.resource_dir),
    )

    return SandboxKitConfig(
        project_root=project_root,
        project=project,
        properties=properties,
        sandbox=sandbox,
        build_details=build_details,
    )
