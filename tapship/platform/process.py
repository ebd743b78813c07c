"""Subprocess execution with Result-based error handling.

Commands are always argument lists; nothing is passed through a shell.

Usage:
    result = run(["shasum", "-a", "256", str(archive)], cwd=root)
    match result:
        case Ok(stdout):
            ...
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from tapship.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from tapship.output.console import ConsoleProtocol

__all__ = ["ProcessError", "run", "run_streaming"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not be started or exited non-zero.

    Attributes:
        command: The argument list that was executed.
        returncode: Exit code, or -1 when the process never ran or timed out.
        stdout: Captured standard output (empty when streamed).
        stderr: Captured standard error, or the OS/timeout message.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: Sequence[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run a command and capture its output.

    Args:
        cmd: Command and arguments.
        cwd: Working directory.
        env: Environment (inherits the current one when None).
        timeout: Seconds before the process is killed (None waits forever).

    Returns:
        Ok(stdout) on exit code 0, Err(ProcessError) otherwise.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            list(command),
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=command,
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=command, returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=command,
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_streaming(
    cmd: Sequence[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
    console: ConsoleProtocol | None = None,
) -> Result[None, ProcessError]:
    """Run a command with the parent's stdout/stderr so output shows live.

    When a console is given the command is echoed before it runs and the
    failing command is reported on error. The error is returned unchanged.
    """
    command = tuple(cmd)
    if console is not None:
        console.command(command)

    error: ProcessError | None = None
    try:
        proc = subprocess.run(list(command), cwd=str(cwd), env=env, timeout=timeout, check=False)
    except subprocess.TimeoutExpired:
        error = ProcessError(
            command=command,
            returncode=-1,
            stdout="",
            stderr=f"Command timed out after {timeout}s",
        )
    except OSError as e:
        error = ProcessError(command=command, returncode=-1, stdout="", stderr=str(e))
    else:
        if proc.returncode != 0:
            error = ProcessError(command=command, returncode=proc.returncode, stdout="", stderr="")

    if error is None:
        return Ok(None)

    if console is not None:
        console.error(f"command failed: {' '.join(command)} (exit {error.returncode})")
    return Err(error)
