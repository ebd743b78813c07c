from __future__ import annotations

import os

import typer

from tapship.cli.commands._helpers import exit_on_error
from tapship.cli.context import build_context
from tapship.release.service import checksum_release, package_release, run_release


def release(
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Render the formula but do not clone, commit or push"
    ),
) -> None:
    """Package every platform, then publish the formula if MANUAL_PUBLISH is set."""
    ctx = build_context()
    summary = exit_on_error(
        run_release(config=ctx.config, env=os.environ, console=ctx.console, dry_run=dry_run),
        ctx,
    )

    names = ", ".join(a.filename for a in summary.archives)
    ctx.console.success(f"{summary.manifest.name} v{summary.manifest.version}: {names}")
    if summary.published is not None and summary.published.pushed:
        ctx.console.success(f"formula pushed to {ctx.config.tap.repo}")


def package() -> None:
    """Archive every platform's prebuilt binary (no publish)."""
    ctx = build_context()
    packaged = exit_on_error(package_release(config=ctx.config, console=ctx.console), ctx)
    for archive in packaged.archives:
        typer.echo(str(archive.path))


def checksum() -> None:
    """Print the sha256 of the archive referenced by the formula."""
    ctx = build_context()
    digest = exit_on_error(checksum_release(config=ctx.config, console=ctx.console), ctx)
    typer.echo(digest)
