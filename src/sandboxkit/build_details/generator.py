"""Generate build-details.txt for compiled output.

The file records what was built, when, by whom and with which toolchain.
It is written to both the compiled classes directory and the resource
directory so it ends up on the runtime classpath either way.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from sandboxkit import __version__
from sandboxkit.build_details.platform import HostInfo, get_host_info
from sandboxkit.core.logging import get_logger

LOGGER = get_logger(__name__)

BUILD_DETAILS_FILENAME = "build-details.txt"
TOOL_NAME = "sandboxkit"
BUILD_TIMESTAMP_FORMAT = "%a %b %d %H:%M:%S %Z %Y"


@dataclass(frozen=True)
class BuildDetails:
    """Build metadata for one project build."""

    name: str
    version: str
    built_at: datetime
    host: HostInfo
    tool_version: str = __version__

    def render(self) -> str:
        """Render the details as the text written to build-details.txt."""
        # %Z is empty for naive timestamps
        timestamp = " ".join(self.built_at.strftime(BUILD_TIMESTAMP_FORMAT).split())
        return (
            f"Name: {self.name}\n"
            f"Version: {self.version}\n"
            "\n"
            f"Build on: {timestamp} by {self.host.builder}\n"
            f"Build OS: {self.host.os_name}-{self.host.os_version}\n"
            f"Build Python: {self.host.runtime_version} {self.host.runtime_vendor}\n"
            f"Build Tool: {TOOL_NAME} {self.tool_version}\n"
        )


def collect_build_details(
    name: str,
    version: str,
    now: Optional[datetime] = None,
    host: Optional[HostInfo] = None,
) -> BuildDetails:
    """Gather build details for a project.

    Args:
        name: Project name.
        version: Project version.
        now: Build timestamp (default: current local time).
        host: Host information (default: detected).
    """
    return BuildDetails(
        name=name,
        version=version,
        built_at=now if now is not None else datetime.now().astimezone(),
        host=host if host is not None else get_host_info(),
    )


def save_build_details(
    details: BuildDetails,
    classes_dir: Path,
    resource_dir: Path,
) -> List[Path]:
    """Write build-details.txt into the classes and resource directories.

    Returns:
        The written file paths, classes directory first.
    """
    content = details.render()
    written: List[Path] = []
    for directory in (classes_dir, resource_dir):
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / BUILD_DETAILS_FILENAME
        target.write_text(content, encoding="utf-8")
        LOGGER.info(f"Build details written to: {target}")
        written.append(target)
    return written
