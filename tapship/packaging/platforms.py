"""Target platforms and their archive policies.

The set is fixed: ``macos`` and ``linux`` ship a gzip-compressed tarball
holding ``<name>``; ``win.exe`` ships a zip holding ``<name>.exe``.

Usage:
    from tapship.packaging.platforms import resolve_platforms

    match resolve_platforms(config.platforms):
        case Ok(platforms):
            for p in platforms:
                print(p.archive_name("hygen", "6.1.0"))
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from tapship.core.config import ConfigError
from tapship.core.result import Err, Ok, Result

__all__ = [
    "ArchiveFormat",
    "KNOWN_PLATFORMS",
    "LINUX",
    "MACOS",
    "TargetPlatform",
    "WINDOWS",
    "get_platform",
    "resolve_platforms",
]


class ArchiveFormat(Enum):
    """Archive container and the file extension it produces."""

    ZIP = "zip"
    TAR_GZ = "tar.gz"

    @property
    def extension(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class TargetPlatform:
    """One release target.

    Attributes:
        id: Identifier used in binary and archive names (e.g. "win.exe").
        archive_format: Container for the archive.
        exe_suffix: Suffix appended to the executable inside the archive.
    """

    id: str
    archive_format: ArchiveFormat
    exe_suffix: str = ""

    def __str__(self) -> str:
        return self.id

    def binary_name(self, name: str) -> str:
        """Name of the prebuilt binary in the work directory."""
        return f"{name}-{self.id}"

    def exe_name(self, name: str) -> str:
        """Name of the executable inside the archive."""
        return f"{name}{self.exe_suffix}"

    def archive_name(self, name: str, version: str) -> str:
        return f"{name}.{self.id}.v{version}.{self.archive_format.extension}"

    def archive_command(self, archive: Path, exe_name: str) -> list[str]:
        """Command that archives exe_name (relative to the scratch dir) into archive."""
        if self.archive_format is ArchiveFormat.ZIP:
            return ["zip", "-j", str(archive), exe_name]
        return ["tar", "-czf", str(archive), exe_name]


MACOS = TargetPlatform(id="macos", archive_format=ArchiveFormat.TAR_GZ)
WINDOWS = TargetPlatform(id="win.exe", archive_format=ArchiveFormat.ZIP, exe_suffix=".exe")
LINUX = TargetPlatform(id="linux", archive_format=ArchiveFormat.TAR_GZ)

KNOWN_PLATFORMS: dict[str, TargetPlatform] = {p.id: p for p in (MACOS, WINDOWS, LINUX)}


def get_platform(platform_id: str) -> Result[TargetPlatform, ConfigError]:
    platform = KNOWN_PLATFORMS.get(platform_id)
    if platform is None:
        return Err(
            ConfigError(
                f"Unknown platform: {platform_id}",
                hint=f"Known platforms: {', '.join(KNOWN_PLATFORMS)}",
            )
        )
    return Ok(platform)


def resolve_platforms(ids: Iterable[str]) -> Result[tuple[TargetPlatform, ...], ConfigError]:
    """Map configured platform ids to targets, rejecting unknown or duplicate ids."""
    resolved: list[TargetPlatform] = []
    for platform_id in ids:
        result = get_platform(platform_id)
        if isinstance(result, Err):
            return result
        if result.value in resolved:
            return Err(ConfigError(f"Platform listed twice: {platform_id}"))
        resolved.append(result.value)

    if not resolved:
        return Err(ConfigError("No platforms configured"))
    return Ok(tuple(resolved))
