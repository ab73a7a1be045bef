"""Validation of the watched directory given on the command line."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from spool_worker.core.errors import (
    DirectoryNotFoundError,
    MissingDirectoryArgumentError,
    NotADirectoryPathError,
)


def resolve_watch_directory(raw: str | None) -> Path:
    """Validate the directory argument and return it as a Path.

    Relative paths are kept relative to the current working directory;
    ``~`` is expanded.

    Args:
        raw: The positional command line argument, if any.

    Returns:
        Path to an existing directory.

    Raises:
        MissingDirectoryArgumentError: If no argument (or an empty one) was given.
            A whitespace-only argument is treated as a path.
        NotADirectoryPathError: If the path exists but is not a directory.
        DirectoryNotFoundError: If the path cannot be stat'ed.
    """
    if not raw:
        raise MissingDirectoryArgumentError()

    path = Path(os.path.expanduser(raw))
    try:
        mode = path.stat().st_mode
    except OSError:
        raise DirectoryNotFoundError(raw) from None
    if not stat.S_ISDIR(mode):
        raise NotADirectoryPathError(raw)
    return path
