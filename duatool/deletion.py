"""Removal of files and directory trees from disk."""

from __future__ import annotations

import os
import stat
from pathlib import Path


class DeletionError(Exception):
    """Raised when some entries could not be deleted."""

    def __init__(self, num_errors: int) -> None:
        super().__init__(f"{num_errors} entries could not be deleted")
        self.num_errors = num_errors


def _remove_file(path: Path) -> int:
    """Remove a file or link, returning the number of errors (0 or 1)."""
    try:
        os.remove(path)
    except FileNotFoundError:
        return 0
    except OSError:
        return 1
    return 0


def _is_symlink(path: Path) -> bool:
    try:
        return stat.S_ISLNK(os.lstat(path).st_mode)
    except OSError:
        # Assume a symlink so that deletion is attempted anyway.
        return True


def delete_directory_recursively(path: str | os.PathLike[str]) -> None:
    """Delete ``path`` and, if it is a directory, all it contains.

    Symbolic links are removed, never followed. Entries that are already gone
    do not count as errors. Raises ``DeletionError`` if anything remains.
    """
    pending = [Path(path)]
    dirs: list[Path] = []
    num_errors = 0
    while pending:
        current = pending.pop()
        if _is_symlink(current):
            num_errors += _remove_file(current)
            continue
        try:
            with os.scandir(current) as it:
                children = [Path(entry.path) for entry in it]
        except NotADirectoryError:
            num_errors += _remove_file(current)
            continue
        except OSError:
            num_errors += 1
            continue
        dirs.append(current)
        pending.extend(children)

    for directory in reversed(dirs):
        try:
            os.rmdir(directory)
        except OSError:
            num_errors += _remove_file(directory)

    if num_errors:
        raise DeletionError(num_errors)