"""Bootstrap settings resolution and the online/offline mode types.

Settings are looked up in the process property store first (``-D`` flags
and the config file's ``properties`` section), then in the OS environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Union

SECRET_REPO_OFFLINE_FOLDER_KEY = "SANDBOX_OFFLINE_SECRET_REPO_FOLDER"
SECRET_REPO_GIT_URL_KEY = "SANDBOX_SECRET_REPO_GIT_URL"


class BootstrapModeKind(str, Enum):
    """Which path the prerequisite check takes."""

    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(frozen=True)
class BootstrapSettings:
    """Raw optional settings read at the start of a run."""

    offline_folder: Optional[str] = None
    git_url: Optional[str] = None

    @property
    def kind(self) -> BootstrapModeKind:
        if self.offline_folder is None:
            return BootstrapModeKind.ONLINE
        return BootstrapModeKind.OFFLINE


@dataclass(frozen=True)
class OnlineMode:
    """Validated online mode: the secret repo is fetched from ``git_url``."""

    git_url: str
    git_host: str

    kind = BootstrapModeKind.ONLINE


@dataclass(frozen=True)
class OfflineMode:
    """Validated offline mode: a pre-existing local folder is used."""

    folder: str

    kind = BootstrapModeKind.OFFLINE


BootstrapMode = Union[OnlineMode, OfflineMode]


def resolve_setting(
    key: str,
    properties: Optional[Mapping[str, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Look up a setting, falling back from properties to the environment.

    Args:
        key: Setting name, e.g. SANDBOX_SECRET_REPO_GIT_URL.
        properties: Process property store.
        environ: Environment mapping (default: os.environ).

    Returns:
        The value, or None when unset or empty in both places.
    """
    env = os.environ if environ is None else environ
    for source in (properties or {}, env):
        value = source.get(key)
        if value:
            return value
    return None


def resolve_bootstrap_settings(
    properties: Optional[Mapping[str, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BootstrapSettings:
    """Read both bootstrap settings. Missing values are not an error."""
    return BootstrapSettings(
        offline_folder=resolve_setting(SECRET_REPO_OFFLINE_FOLDER_KEY, properties, environ),
        git_url=resolve_setting(SECRET_REPO_GIT_URL_KEY, properties, environ),
    )
