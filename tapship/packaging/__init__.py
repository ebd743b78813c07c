"""Release archive packaging."""

from .packager import Archive, PackageError, package_all, package_platform
from .platforms import (
    KNOWN_PLATFORMS,
    ArchiveFormat,
    TargetPlatform,
    get_platform,
    resolve_platforms,
)

__all__ = [
    "Archive",
    "ArchiveFormat",
    "KNOWN_PLATFORMS",
    "PackageError",
    "TargetPlatform",
    "get_platform",
    "package_all",
    "package_platform",
    "resolve_platforms",
]
