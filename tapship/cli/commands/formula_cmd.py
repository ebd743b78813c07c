from __future__ import annotations

from pathlib import Path

import typer

from tapship.cli.commands._helpers import exit_on_error
from tapship.cli.context import build_context
from tapship.core.config import load_manifest
from tapship.platform.files import atomic_write_text
from tapship.release.checksum import validate_sha256
from tapship.release.formula import render_formula


def formula(
    sha256: str = typer.Option(..., "--sha256", help="Digest of the macOS archive"),
    version: str | None = typer.Option(
        None, "--release-version", help="Version to render (defaults to the manifest version)"
    ),
    out: Path | None = typer.Option(None, "--out", help="Write to a file instead of stdout"),
) -> None:
    """Render the Homebrew formula."""
    ctx = build_context()
    manifest = exit_on_error(load_manifest(ctx.config.manifest_path), ctx)
    digest = exit_on_error(validate_sha256(sha256), ctx)

    text = render_formula(
        name=manifest.name,
        checksum=digest,
        version=version or manifest.version,
        formula=ctx.config.formula,
    )
    if out is None:
        typer.echo(text, nl=False)
        return

    atomic_write_text(out, text)
    ctx.console.success(str(out))
