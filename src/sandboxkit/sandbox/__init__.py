"""
Sandbox prerequisite check.

This package handles:
- Resolving the online/offline bootstrap settings
- Validating git, ssh and offline folder prerequisites
- Cloning or updating the secret repository
- Generating config and deploying the web app secrets file
"""

from sandboxkit.sandbox.environment import (
    BootstrapMode,
    BootstrapModeKind,
    BootstrapSettings,
    OfflineMode,
    OnlineMode,
    resolve_bootstrap_settings,
)
from sandboxkit.sandbox.errors import SandboxError
from sandboxkit.sandbox.workflow import CheckReport, PrerequisitesCheck

__all__ = [
    "BootstrapMode",
    "BootstrapModeKind",
    "BootstrapSettings",
    "OfflineMode",
    "OnlineMode",
    "resolve_bootstrap_settings",
    "SandboxError",
    "CheckReport",
    "PrerequisitesCheck",
]
