"""Failures raised by the sandbox prerequisite check.

Every failure is fatal to the run. ``hint`` carries the corrective action
for the operator when there is one.
"""

from __future__ import annotations

from typing import Optional


class SandboxError(Exception):
    """Base class for prerequisite check failures."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class PrerequisiteError(SandboxError):
    """Local tooling or configuration is not usable."""


class ToolMissingError(PrerequisiteError):
    """A required external tool is not installed."""


class MissingConfigError(PrerequisiteError):
    """A required setting is neither a property nor an environment variable."""


class MalformedLocatorError(PrerequisiteError):
    """The secret repository URL has no extractable host."""


class ConnectivityError(PrerequisiteError):
    """The git host cannot be reached over ssh."""


class FolderNotFoundError(PrerequisiteError):
    """The offline secret repository folder does not exist."""


class PolicyViolationError(PrerequisiteError):
    """The offline secret repository folder is not the allowed path."""


class SyncError(SandboxError):
    """The secret repository could not be cloned or updated."""


class CloneFailedError(SyncError):
    pass


class PullFailedError(SyncError):
    pass


class DeployError(SandboxError):
    """Configuration could not be generated or the secrets file deployed."""


class ConfigGenFailedError(DeployError):
    pass


class CopySourceMissingError(DeployError):
    pass


class CopyIOError(DeployError):
    pass
