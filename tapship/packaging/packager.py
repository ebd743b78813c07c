"""Per-platform archive packaging.

For each target the prebuilt ``<work_dir>/<name>-<platform>`` binary is moved
into a scratch directory ``<root>/__<platform>`` under its shipped name, then
archived next to the other release assets:

    standalone/hygen.macos.v6.1.0.tar.gz
    standalone/hygen.win.exe.v6.1.0.zip
    standalone/hygen.linux.v6.1.0.tar.gz

The scratch directory is removed whether or not archiving succeeds. When
archiving fails the binary is moved back to the work directory first. Targets
are packaged concurrently; scratch paths are disjoint so branches never
touch the same files.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from tapship.core.config import Manifest, ReleaseConfig
from tapship.core.result import Err, Ok, Result
from tapship.output.console import ConsoleProtocol
from tapship.packaging.platforms import TargetPlatform
from tapship.platform.files import move_file, prepare_dir, remove_path
from tapship.platform.process import run_streaming

__all__ = ["Archive", "PackageError", "package_all", "package_platform"]


@dataclass(frozen=True, slots=True)
class Archive:
    """A produced release archive."""

    platform: TargetPlatform
    path: Path

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass(frozen=True, slots=True)
class PackageError:
    kind: Literal["binary_missing", "filesystem_failed", "archive_failed"]
    platform: str
    message: str
    hint: str | None = None


def package_platform(
    platform: TargetPlatform,
    *,
    config: ReleaseConfig,
    manifest: Manifest,
    console: ConsoleProtocol,
) -> Result[Archive, PackageError]:
    """Archive one platform's prebuilt binary."""
    work = config.work_path
    source = work / platform.binary_name(manifest.name)
    if not source.is_file():
        return Err(
            PackageError(
                kind="binary_missing",
                platform=platform.id,
                message=f"prebuilt binary not found: {source}",
                hint=f"Build the standalone binaries into {work} first.",
            )
        )

    scratch = config.scratch_path(platform.id)
    prepared = prepare_dir(scratch)
    if isinstance(prepared, Err):
        return Err(
            PackageError(
                kind="filesystem_failed",
                platform=platform.id,
                message=str(prepared.error),
            )
        )

    try:
        return _archive_from_scratch(
            platform,
            source=source,
            scratch=scratch,
            work=work,
            manifest=manifest,
            console=console,
        )
    finally:
        cleanup = remove_path(scratch)
        if isinstance(cleanup, Err):
            console.warning(f"{platform.id}: {cleanup.error}")


def _archive_from_scratch(
    platform: TargetPlatform,
    *,
    source: Path,
    scratch: Path,
    work: Path,
    manifest: Manifest,
    console: ConsoleProtocol,
) -> Result[Archive, PackageError]:
    exe_name = platform.exe_name(manifest.name)
    moved = move_file(source, scratch / exe_name)
    if isinstance(moved, Err):
        return Err(
            PackageError(kind="filesystem_failed", platform=platform.id, message=str(moved.error))
        )

    result = _write_archive(
        platform, exe_name=exe_name, scratch=scratch, work=work, manifest=manifest, console=console
    )
    if isinstance(result, Err):
        # Put the prebuilt binary back so a rerun still finds it.
        restored = move_file(moved.value, source)
        if isinstance(restored, Err):
            console.warning(f"{platform.id}: {restored.error}")
        return result

    console.success(result.value.filename)
    return result


def _write_archive(
    platform: TargetPlatform,
    *,
    exe_name: str,
    scratch: Path,
    work: Path,
    manifest: Manifest,
    console: ConsoleProtocol,
) -> Result[Archive, PackageError]:
    # zip appends to an existing archive; start from an empty path so the
    # archive always holds exactly one entry.
    archive = (work / platform.archive_name(manifest.name, manifest.version)).resolve()
    stale = remove_path(archive)
    if isinstance(stale, Err):
        return Err(
            PackageError(kind="filesystem_failed", platform=platform.id, message=str(stale.error))
        )

    result = run_streaming(
        platform.archive_command(archive, exe_name),
        cwd=scratch,
        console=console,
    )
    if isinstance(result, Err):
        e = result.error
        return Err(
            PackageError(
                kind="archive_failed",
                platform=platform.id,
                message=str(e),
                hint=e.stderr.strip() or None,
            )
        )

    return Ok(Archive(platform=platform, path=archive))


def package_all(
    platforms: Sequence[TargetPlatform],
    *,
    config: ReleaseConfig,
    manifest: Manifest,
    console: ConsoleProtocol,
) -> Result[list[Archive], PackageError]:
    """Package every platform concurrently and wait for all of them.

    Siblings of a failing branch run to completion; nothing is cancelled.
    Every failure is reported, and the first one in platform order is
    returned.
    """
    if not platforms:
        return Ok([])

    with ThreadPoolExecutor(max_workers=len(platforms), thread_name_prefix="package") as pool:
        futures = [
            pool.submit(
                package_platform,
                platform,
                config=config,
                manifest=manifest,
                console=console,
            )
            for platform in platforms
        ]
        results = [future.result() for future in futures]

    archives: list[Archive] = []
    errors: list[PackageError] = []
    for result in results:
        match result:
            case Ok(archive):
                archives.append(archive)
            case Err(error):
                errors.append(error)

    if errors:
        for error in errors:
            console.error(f"{error.platform}: {error.message}")
        return Err(errors[0])
    return Ok(archives)
