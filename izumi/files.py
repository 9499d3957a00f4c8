"""Checking and loading trace files."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass

from .data_structs import InstructionTableArray
from .parser import parse_file


@dataclass(frozen=True)
class FileData:
    """Whether a path exists and whether it is a regular file."""

    exists: bool
    is_file: bool = False


def check_file(path: str | os.PathLike[str] | None) -> FileData:
    """Look up ``path``, following symbolic links."""
    if path is None:
        return FileData(exists=False)
    try:
        mode = os.stat(path).st_mode
    except (OSError, ValueError):
        return FileData(exists=False)
    return FileData(exists=True, is_file=stat.S_ISREG(mode))


def read_file(path: str | os.PathLike[str]) -> tuple[str, InstructionTableArray]:
    """Parse the trace at ``path`` and return its base name with its tables.

    Raises FileNotFoundError when ``path`` is not an existing regular file.
    """
    if not check_file(path).is_file:
        raise FileNotFoundError(f"not a regular file: {os.fspath(path)}")
    return os.path.basename(os.fspath(path)), parse_file(path)