"""Error presentation and exit code mapping for release runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tapship.core.config import ConfigError
from tapship.core.errors import ErrorCode
from tapship.output.console import Style
from tapship.packaging.packager import PackageError
from tapship.release.errors import ReleaseError

if TYPE_CHECKING:
    from tapship.output.console import ConsoleProtocol

__all__ = ["print_run_error", "run_error_exit_code"]


def print_run_error(
    error: ReleaseError | PackageError | ConfigError, console: ConsoleProtocol
) -> None:
    """Print an error and its hint."""
    match error:
        case ConfigError(message=message, path=path) if path is not None:
            console.error(f"{message} [{path.name}]")
        case _:
            console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def run_error_exit_code(error: ReleaseError | PackageError | ConfigError) -> int:
    """Exit status for a failed run; every kind of error exits 1."""
    del error
    return int(ErrorCode.ERROR)
