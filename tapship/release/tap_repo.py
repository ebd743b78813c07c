"""Git operations on the Homebrew tap clone.

All commands run with captured output so the token embedded in the remote
URL can be masked before anything is shown.
"""

from __future__ import annotations

from pathlib import Path

from tapship.core.config import TapConfig
from tapship.core.result import Err, Ok, Result
from tapship.output.console import ConsoleProtocol
from tapship.platform.process import run as run_process
from tapship.release.errors import ReleaseError
from tapship.release.timeouts import GIT_NETWORK_TIMEOUT_SECONDS, GIT_TIMEOUT_SECONDS

__all__ = ["clone_tap", "commit_and_push", "configure_author", "mask_token"]

_MASK = "***"


def mask_token(text: str, token: str | None) -> str:
    if not token:
        return text
    return text.replace(token, _MASK)


def _run_git(
    *,
    cmd: list[str],
    cwd: Path,
    token: str | None,
    console: ConsoleProtocol,
    network: bool = False,
) -> Result[str, ReleaseError]:
    shown = [mask_token(arg, token) for arg in cmd]
    console.command(shown)

    timeout = GIT_NETWORK_TIMEOUT_SECONDS if network else GIT_TIMEOUT_SECONDS
    result = run_process(cmd, cwd=cwd, timeout=timeout)
    if isinstance(result, Err):
        e = result.error
        console.error(f"command failed: {' '.join(shown)} (exit {e.returncode})")
        return Err(
            ReleaseError(
                kind="tap_failed",
                message=f"git failed: {' '.join(shown[:3])}",
                hint=mask_token(e.stderr.strip(), token) or None,
            )
        )
    return Ok(result.value)


def clone_tap(
    *,
    tap: TapConfig,
    dest: Path,
    token: str,
    console: ConsoleProtocol,
) -> Result[Path, ReleaseError]:
    """Shallow-clone the tap into dest, which must not exist yet."""
    result = _run_git(
        cmd=["git", "clone", "--depth", "1", tap.authenticated_url(token), str(dest)],
        cwd=dest.parent,
        token=token,
        console=console,
        network=True,
    )
    if isinstance(result, Err):
        return result
    return Ok(dest)


def configure_author(
    *,
    repo_root: Path,
    tap: TapConfig,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    for key, value in (("user.email", tap.author_email), ("user.name", tap.author_name)):
        result = _run_git(
            cmd=["git", "config", key, value],
            cwd=repo_root,
            token=None,
            console=console,
        )
        if isinstance(result, Err):
            return result
    return Ok(None)


def commit_and_push(
    *,
    repo_root: Path,
    paths: list[Path],
    message: str,
    tap: TapConfig,
    token: str,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Stage paths, commit them and push HEAD to the tap's default branch."""
    rels = [str(p.relative_to(repo_root)) for p in paths]

    add = _run_git(
        cmd=["git", "add", "--", *rels], cwd=repo_root, token=token, console=console
    )
    if isinstance(add, Err):
        return add

    commit = _run_git(
        cmd=["git", "commit", "-m", message], cwd=repo_root, token=token, console=console
    )
    if isinstance(commit, Err):
        return commit

    push = _run_git(
        cmd=["git", "push", tap.authenticated_url(token), "HEAD"],
        cwd=repo_root,
        token=token,
        console=console,
        network=True,
    )
    if isinstance(push, Err):
        return push

    return Ok(None)
