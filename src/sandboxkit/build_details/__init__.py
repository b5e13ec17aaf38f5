"""
Build details stamping.

Writes build-details.txt (name, version, timestamp, builder, OS, runtime
and tool versions) into a project's compiled output.
"""

from sandboxkit.build_details.generator import (
    BUILD_DETAILS_FILENAME,
    BuildDetails,
    collect_build_details,
    save_build_details,
)
from sandboxkit.build_details.platform import HostInfo, get_host_info

__all__ = [
    "BUILD_DETAILS_FILENAME",
    "BuildDetails",
    "collect_build_details",
    "save_build_details",
    "HostInfo",
    "get_host_info",
]
