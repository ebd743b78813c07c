"""Filesystem helpers for scratch directories and generated files."""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from tapship.core.result import Err, Ok, Result

__all__ = [
    "FileOpError",
    "atomic_write_text",
    "move_file",
    "prepare_dir",
    "remove_path",
]


@dataclass(frozen=True, slots=True)
class FileOpError:
    """A filesystem operation failed.

    Attributes:
        operation: Short verb, e.g. "prepare" or "move".
        path: Path the operation was applied to.
        message: OS error text.
    """

    operation: str
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.operation} {self.path}: {self.message}"


def _rmtree(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def prepare_dir(path: Path) -> Result[Path, FileOpError]:
    """Delete path (with its contents) if present, then create it fresh.

    Safe to call whether or not the path exists.
    """
    try:
        if path.exists() or path.is_symlink():
            _rmtree(path)
        path.mkdir(parents=True)
    except OSError as e:
        return Err(FileOpError(operation="prepare", path=path, message=str(e)))
    return Ok(path)


def remove_path(path: Path) -> Result[None, FileOpError]:
    """Remove a file or directory tree; a missing path is not an error."""
    try:
        if path.exists() or path.is_symlink():
            _rmtree(path)
    except OSError as e:
        return Err(FileOpError(operation="remove", path=path, message=str(e)))
    return Ok(None)


def move_file(src: Path, dest: Path) -> Result[Path, FileOpError]:
    """Move src to dest, replacing dest if it exists."""
    try:
        shutil.move(str(src), str(dest))
    except OSError as e:
        return Err(FileOpError(operation="move", path=src, message=str(e)))
    return Ok(dest)


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to path atomically using temp file + replace."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)
