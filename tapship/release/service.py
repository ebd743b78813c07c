"""Release orchestration.

    validate env -> package all platforms -> list work dir -> publish (optional)

The environment gate runs before anything touches the filesystem or spawns
a process. Publishing only happens when the manual-publish flag is set.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from tapship.core.config import ConfigError, Manifest, ReleaseConfig, load_manifest
from tapship.core.result import Err, Ok, Result
from tapship.output.console import ConsoleProtocol, Style
from tapship.packaging.packager import Archive, PackageError, package_all
from tapship.packaging.platforms import TargetPlatform, get_platform, resolve_platforms
from tapship.release.checksum import compute_checksum
from tapship.release.env import validate_environment
from tapship.release.errors import ReleaseError
from tapship.release.publish import PublishedFormula, publish_formula

__all__ = [
    "PackagedRelease",
    "ReleaseSummary",
    "RunError",
    "checksum_release",
    "package_release",
    "run_release",
]

type RunError = ReleaseError | PackageError | ConfigError


@dataclass(frozen=True, slots=True)
class PackagedRelease:
    manifest: Manifest
    archives: tuple[Archive, ...]

    def archive_for(self, platform: TargetPlatform) -> Archive | None:
        for archive in self.archives:
            if archive.platform == platform:
                return archive
        return None


@dataclass(frozen=True, slots=True)
class ReleaseSummary:
    manifest: Manifest
    archives: tuple[Archive, ...]
    published: PublishedFormula | None = None


def _checksum_platform(
    config: ReleaseConfig, platforms: tuple[TargetPlatform, ...]
) -> Result[TargetPlatform, ConfigError]:
    result = get_platform(config.checksum_platform)
    if isinstance(result, Err):
        return result
    if result.value not in platforms:
        return Err(
            ConfigError(
                f"Checksum platform {config.checksum_platform} is not packaged",
                hint=f"Packaged platforms: {', '.join(p.id for p in platforms)}",
            )
        )
    return result


def package_release(
    *,
    config: ReleaseConfig,
    console: ConsoleProtocol,
) -> Result[PackagedRelease, RunError]:
    """Read the manifest and archive every configured platform."""
    manifest = load_manifest(config.manifest_path)
    if isinstance(manifest, Err):
        return manifest

    platforms = resolve_platforms(config.platforms)
    if isinstance(platforms, Err):
        return platforms

    console.header(f"Packaging {manifest.value.name} v{manifest.value.version}")
    archives = package_all(
        platforms.value,
        config=config,
        manifest=manifest.value,
        console=console,
    )
    if isinstance(archives, Err):
        return archives

    return Ok(PackagedRelease(manifest=manifest.value, archives=tuple(archives.value)))


def list_work_dir(*, config: ReleaseConfig, console: ConsoleProtocol) -> Result[None, ReleaseError]:
    """Print the work directory's contents."""
    try:
        entries = sorted(p.name for p in config.work_path.iterdir())
    except OSError as e:
        return Err(
            ReleaseError(kind="filesystem_failed", message=f"cannot list {config.work_path}: {e}")
        )

    console.header(str(config.work_path))
    for name in entries:
        console.print(name, Style.DIM)
    return Ok(None)


def run_release(
    *,
    config: ReleaseConfig,
    env: Mapping[str, str],
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[ReleaseSummary, RunError]:
    """Run the whole release.

    Args:
        config: Release configuration.
        env: Process environment (publish flag and token).
        console: Output sink.
        dry_run: Render the formula but skip clone/commit/push.
    """
    request = validate_environment(env, config=config)
    if isinstance(request, Err):
        return request

    platforms = resolve_platforms(config.platforms)
    if isinstance(platforms, Err):
        return platforms
    checksum_platform = _checksum_platform(config, platforms.value)
    if isinstance(checksum_platform, Err):
        return checksum_platform

    packaged = package_release(config=config, console=console)
    if isinstance(packaged, Err):
        return packaged
    release = packaged.value

    listed = list_work_dir(config=config, console=console)
    if isinstance(listed, Err):
        return listed

    if not request.value.publish or request.value.token is None:
        console.info(f"{config.publish_env} not set, skipping formula publish")
        return Ok(ReleaseSummary(manifest=release.manifest, archives=release.archives))

    archive = release.archive_for(checksum_platform.value)
    if archive is None:
        return Err(
            ReleaseError(
                kind="invalid_config",
                message=f"no archive produced for {checksum_platform.value.id}",
            )
        )

    console.header(f"Publishing formula to {config.tap.repo}")
    published = publish_formula(
        archive.path,
        config=config,
        manifest=release.manifest,
        token=request.value.token,
        console=console,
        dry_run=dry_run,
    )
    if isinstance(published, Err):
        return published

    return Ok(
        ReleaseSummary(
            manifest=release.manifest,
            archives=release.archives,
            published=published.value,
        )
    )


def checksum_release(
    *,
    config: ReleaseConfig,
    console: ConsoleProtocol,
) -> Result[str, RunError]:
    """Checksum the already-built archive of the checksum platform."""
    manifest = load_manifest(config.manifest_path)
    if isinstance(manifest, Err):
        return manifest

    platform = get_platform(config.checksum_platform)
    if isinstance(platform, Err):
        return platform

    archive = config.work_path / platform.value.archive_name(
        manifest.value.name, manifest.value.version
    )
    if not archive.is_file():
        return Err(
            ReleaseError(
                kind="checksum_failed",
                message=f"archive not found: {archive}",
                hint="Run `tapship package` first.",
            )
        )
    return compute_checksum(archive, config=config, console=console)
