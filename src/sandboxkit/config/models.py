"""Typed configuration for sandboxkit."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

DEFAULT_SECRET_REPO_DIR = "target/secretRepo"
DEFAULT_ALLOWED_OFFLINE_FOLDER = "/opt"
DEFAULT_CLASSES_DIR = "target/classes"
DEFAULT_RESOURCE_DIR = "src/main/resources"


@dataclass
class ProjectConfig:
    """Project identity stamped into build details."""

    name: str = ""
    version: str = ""


@dataclass
class SandboxConfig:
    """Settings for the sandbox prerequisite check.

    Attributes:
        web_app_secrets: Secrets file to deploy, e.g. /opt/my-app/conf/myApp.conf.
        secret_repo_dir: Working copy of the secret repo, relative to the project root.
        allowed_offline_folder: The only accepted offline secret repo folder.
        app_base_dir: Base directory of the web app receiving the secrets.
    """

    web_app_secrets: Optional[str] = None
    secret_repo_dir: str = DEFAULT_SECRET_REPO_DIR
    allowed_offline_folder: str = DEFAULT_ALLOWED_OFFLINE_FOLDER
    app_base_dir: str = "."


@dataclass
class BuildDetailsConfig:
    """Output directories for build-details.txt."""

    classes_dir: str = DEFAULT_CLASSES_DIR
    resource_dir: str = DEFAULT_RESOURCE_DIR


@dataclass
class SandboxKitConfig:
    """Complete sandboxkit configuration for one project."""

    project_root: Path = field(default_factory=Path.cwd)
    project: ProjectConfig = field(default_factory=ProjectConfig)
    properties: Dict[str, str] = field(default_factory=dict)
    sandbox: SandboxConfig = field(default_factory=SandboxConfig)
    build_details: BuildDetailsConfig = field(default_factory=BuildDetailsConfig)

    # Where the settings came from, for diagnostics
    _config_sources: List[str] = field(default_factory=list, repr=False)

    def resolve_path(self, value: Union[str, Path]) -> Path:
        """Resolve a configured path against the project root."""
        path = Path(value).expanduser()
        if path.is_absolute():
            return path
        return self.project_root / path

    @property
    def secret_repo_path(self) -> Path:
        return self.resolve_path(self.sandbox.secret_repo_dir)

    @property
    def app_base_path(self) -> Path:
        return self.resolve_path(self.sandbox.app_base_dir)
