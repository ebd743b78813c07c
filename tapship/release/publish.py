"""Publish a rendered formula to the Homebrew tap.

Steps, each aborting the publish on failure:

1. checksum the designated archive
2. render the formula and write it to a per-run temporary directory
3. clone the tap into that directory
4. move the formula into the clone, commit as the configured author, push

The temporary directory (formula copy and clone) is removed on every path.
Nothing already pushed is rolled back.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path

from tapship.core.config import Manifest, ReleaseConfig
from tapship.core.result import Err, Ok, Result
from tapship.output.console import ConsoleProtocol
from tapship.platform.files import atomic_write_text, move_file, remove_path
from tapship.release.checksum import compute_checksum
from tapship.release.errors import ReleaseError
from tapship.release.formula import formula_filename, render_formula
from tapship.release.tap_repo import clone_tap, commit_and_push, configure_author

__all__ = ["PublishedFormula", "commit_message", "publish_formula"]


@dataclass(frozen=True, slots=True)
class PublishedFormula:
    checksum: str
    formula: str
    commit_message: str
    pushed: bool


def commit_message(manifest: Manifest) -> str:
    return f"{manifest.name}: auto-release v{manifest.version}"


def publish_formula(
    archive: Path,
    *,
    config: ReleaseConfig,
    manifest: Manifest,
    token: str,
    console: ConsoleProtocol,
    dry_run: bool = False,
    temp_root: Path | None = None,
) -> Result[PublishedFormula, ReleaseError]:
    """Checksum archive, render the formula and push it to the tap.

    Args:
        archive: Archive whose digest goes into the formula.
        token: Credential embedded in the clone/push URL.
        dry_run: Stop after rendering; no clone, commit or push.
        temp_root: Parent for the per-run temporary directory (system default if None).
    """
    run_dir = Path(tempfile.mkdtemp(prefix=f"tapship-{manifest.name}-", dir=temp_root))
    formula_tmp = run_dir / formula_filename(manifest.name)
    try:
        return _publish(
            archive,
            run_dir=run_dir,
            formula_tmp=formula_tmp,
            config=config,
            manifest=manifest,
            token=token,
            console=console,
            dry_run=dry_run,
        )
    finally:
        formula_tmp.unlink(missing_ok=True)
        cleanup = remove_path(run_dir)
        if isinstance(cleanup, Err):
            console.warning(str(cleanup.error))


def _publish(
    archive: Path,
    *,
    run_dir: Path,
    formula_tmp: Path,
    config: ReleaseConfig,
    manifest: Manifest,
    token: str,
    console: ConsoleProtocol,
    dry_run: bool,
) -> Result[PublishedFormula, ReleaseError]:
    checksum = compute_checksum(archive, config=config, console=console)
    if isinstance(checksum, Err):
        return checksum
    console.info(f"sha256 {checksum.value}  {archive.name}")

    text = render_formula(
        name=manifest.name,
        checksum=checksum.value,
        version=manifest.version,
        formula=config.formula,
    )
    message = commit_message(manifest)

    try:
        atomic_write_text(formula_tmp, text)
    except OSError as e:
        return Err(
            ReleaseError(kind="filesystem_failed", message=f"cannot write {formula_tmp}: {e}")
        )

    if dry_run:
        console.print(text)
        console.warning(f"dry run: not pushing {formula_tmp.name} to {config.tap.repo}")
        return Ok(
            PublishedFormula(
                checksum=checksum.value, formula=text, commit_message=message, pushed=False
            )
        )

    cloned = clone_tap(tap=config.tap, dest=run_dir / "tap", token=token, console=console)
    if isinstance(cloned, Err):
        return cloned
    tap_root = cloned.value

    moved = move_file(formula_tmp, tap_root / formula_tmp.name)
    if isinstance(moved, Err):
        return Err(ReleaseError(kind="filesystem_failed", message=str(moved.error)))

    author = configure_author(repo_root=tap_root, tap=config.tap, console=console)
    if isinstance(author, Err):
        return author

    pushed = commit_and_push(
        repo_root=tap_root,
        paths=[moved.value],
        message=message,
        tap=config.tap,
        token=token,
        console=console,
    )
    if isinstance(pushed, Err):
        return pushed

    console.success(f"published {formula_tmp.name} to {config.tap.repo}")
    return Ok(
        PublishedFormula(checksum=checksum.value, formula=text, commit_message=message, pushed=True)
    )
