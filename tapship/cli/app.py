from __future__ import annotations

import os
from pathlib import Path

import typer

from tapship import __version__
from tapship.cli.commands.formula_cmd import formula
from tapship.cli.commands.release_cmd import checksum, package, release
from tapship.cli.context import CONFIG_ENV, ROOT_ENV
from tapship.core.errors import ErrorCode

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

app.command()(release)
app.command()(package)
app.command()(checksum)
app.command()(formula)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root holding the manifest and work directory (default: cwd)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: <root>/tapship.toml if present)",
    ),
) -> None:
    del version

    if root is not None:
        resolved = root.expanduser().resolve()
        if not resolved.is_dir():
            typer.echo(f"error: --root '{resolved}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.ERROR))
        os.environ[ROOT_ENV] = str(resolved)

    if config is not None:
        os.environ[CONFIG_ENV] = str(config.expanduser().resolve())


def main() -> None:
    try:
        app()
    except Exception as e:
        typer.echo(f"error: {e}", err=True)
        raise SystemExit(1) from e
