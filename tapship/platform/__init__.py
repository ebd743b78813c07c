"""Platform abstraction layer: processes and filesystem."""

from .files import (
    FileOpError,
    atomic_write_text,
    move_file,
    prepare_dir,
    remove_path,
)
from .process import (
    ProcessError,
    run,
    run_streaming,
)

__all__ = [
    # files
    "FileOpError",
    "atomic_write_text",
    "move_file",
    "prepare_dir",
    "remove_path",
    # process
    "ProcessError",
    "run",
    "run_streaming",
]
