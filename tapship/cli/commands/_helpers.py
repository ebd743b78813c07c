"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from tapship.core.config import ConfigError
from tapship.core.result import Err, Result
from tapship.output.errors import print_run_error, run_error_exit_code
from tapship.packaging.packager import PackageError
from tapship.release.errors import ReleaseError

if TYPE_CHECKING:
    from tapship.cli.context import CLIContext


def exit_on_error[T](
    result: Result[T, ReleaseError | PackageError | ConfigError],
    ctx: CLIContext,
) -> T:
    """Return the Ok value, or print the error and exit with its code."""
    if isinstance(result, Err):
        print_run_error(result.error, ctx.console)
        raise typer.Exit(code=run_error_exit_code(result.error))
    return result.value
