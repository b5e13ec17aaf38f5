"""Build host and runtime detection for build details."""

from __future__ import annotations

import getpass
import platform
import socket
from dataclasses import dataclass

UNKNOWN = "Unknown"


def _or_unknown(value: str) -> str:
    return value if value else UNKNOWN


def detect_user() -> str:
    """Return the login name of the user running the build."""
    try:
        return _or_unknown(getpass.getuser())
    except (KeyError, OSError):
        # No passwd entry and no USER/LOGNAME variables
        return UNKNOWN


def detect_hostname() -> str:
    """Return the local hostname."""
    try:
        return _or_unknown(socket.gethostname())
    except OSError:
        return UNKNOWN


@dataclass(frozen=True)
class HostInfo:
    """Information about the machine and runtime doing the build.

    Attributes:
        user: Login name of the builder.
        hostname: Build machine hostname.
        os_name: Operating system name (Linux, Darwin, Windows).
        os_version: Operating system release.
        runtime_version: Python version.
        runtime_vendor: Python implementation (CPython, PyPy).
    """

    user: str
    hostname: str
    os_name: str
    os_version: str
    runtime_version: str
    runtime_vendor: str

    @property
    def builder(self) -> str:
        """Builder identity as user@hostname."""
        return f"{self.user}@{self.hostname}"


def get_host_info() -> HostInfo:
    """Detect and return build host information."""
    return HostInfo(
        user=detect_user(),
        hostname=detect_hostname(),
        os_name=_or_unknown(platform.system()),
        os_version=_or_unknown(platform.release()),
        runtime_version=_or_unknown(platform.python_version()),
        runtime_vendor=_or_unknown(platform.python_implementation()),
    )
