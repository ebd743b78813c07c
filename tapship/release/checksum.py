from __future__ import annotations

import re
from pathlib import Path

from tapship.core.config import ReleaseConfig
from tapship.core.result import Err, Ok, Result
from tapship.output.console import ConsoleProtocol
from tapship.platform.process import run as run_process
from tapship.release.errors import ReleaseError
from tapship.release.timeouts import CHECKSUM_TIMEOUT_SECONDS

# First run of hex digits long enough to be a digest, followed by whitespace
# (``shasum`` and ``sha256sum`` print "<digest>  <path>").
_DIGEST_RE = re.compile(r"\b([0-9a-fA-F]{32,})\s")


def parse_checksum(output: str) -> Result[str, ReleaseError]:
    """Extract the digest from checksum utility output."""
    match = _DIGEST_RE.search(output)
    if match is None:
        shown = output.strip() or "<empty>"
        return Err(
            ReleaseError(
                kind="checksum_failed",
                message="could not find a checksum in the checksum tool output",
                hint=f"output was: {shown[:200]}",
            )
        )
    return Ok(match.group(1).lower())


def compute_checksum(
    archive: Path,
    *,
    config: ReleaseConfig,
    console: ConsoleProtocol,
) -> Result[str, ReleaseError]:
    cmd = [*config.checksum_command, str(archive)]
    console.command(cmd)
    result = run_process(cmd, cwd=config.root, timeout=CHECKSUM_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        e = result.error
        console.error(f"command failed: {' '.join(cmd)} (exit {e.returncode})")
        return Err(
            ReleaseError(
                kind="checksum_failed",
                message=f"checksum failed for {archive.name}",
                hint=e.stderr.strip() or None,
            )
        )
    return parse_checksum(result.value)


_SHA256_RE = re.compile(r"[0-9a-fA-F]{64}")


def validate_sha256(value: str) -> Result[str, ReleaseError]:
    """Accept exactly one SHA-256 hex digest, lowercased."""
    digest = value.strip()
    if _SHA256_RE.fullmatch(digest) is None:
        return Err(
            ReleaseError(
                kind="invalid_config",
                message=f"not a SHA-256 hex digest: {value!r}",
                hint="Pass the 64-digit output of `tapship checksum`.",
            )
        )
    return Ok(digest.lower())
