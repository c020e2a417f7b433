"""Non-interactive aggregation of disk usage per path."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, TextIO

from . import crossdev
from .common import ByteFormat, Throttle, WalkEntry, WalkOptions, WalkResult
from .inodefilter import InodeFilter

_GREEN = "\x1b[32m"
_CYAN = "\x1b[36m"
_RESET_FG = "\x1b[39m"
_CLEAR_LINE = "\x1b[2K\r"
_UNSET_SMALLEST = 2**128 - 1


@dataclass
class Statistics:
    """Statistics obtained during a filesystem walk."""

    entries_traversed: int = 0
    smallest_file_in_bytes: int = 0
    largest_file_in_bytes: int = 0


def aggregate(
    out: TextIO,
    err: TextIO | None,
    walk_options: WalkOptions,
    compute_total: bool,
    sort_by_size_in_bytes: bool,
    byte_format: ByteFormat,
    paths: Iterable[str | os.PathLike[str]],
) -> tuple[WalkResult, Statistics]:
    """Write the size of each of ``paths`` to ``out`` in human-readable form.

    With ``compute_total`` an extra line holds the total of all paths when
    there is more than one; with ``sort_by_size_in_bytes`` lines are sorted
    by size, ascending.
    """
    result = WalkResult()
    stats = Statistics(smallest_file_in_bytes=_UNSET_SMALLEST)
    total = 0
    num_roots = 0
    aggregates: list[tuple[Path, int, int]] = []
    inodes = InodeFilter()
    progress = Throttle(0.1, 1.0)

    for raw_path in paths:
        path = Path(raw_path)
        num_roots += 1
        num_bytes = 0
        num_errors = 0
        try:
            device_id = crossdev.init(path)
        except OSError:
            num_errors += 1
            result.num_errors += 1
            aggregates.append((path, num_bytes, num_errors))
            continue

        for entry in walk_options.iter_from_path(path, device_id, False):
            stats.entries_traversed += 1
            if err is not None:
                progress.throttled(
                    lambda: err.write(f"Enumerating {stats.entries_traversed} items\r")
                )
            if not entry.ok:
                num_errors += 1
                continue
            file_size, failed = _entry_size(entry, walk_options, inodes, device_id)
            num_errors += failed
            stats.largest_file_in_bytes = max(stats.largest_file_in_bytes, file_size)
            stats.smallest_file_in_bytes = min(stats.smallest_file_in_bytes, file_size)
            num_bytes += file_size

        if err is not None:
            err.write(_CLEAR_LINE)

        if sort_by_size_in_bytes:
            aggregates.append((path, num_bytes, num_errors))
        else:
            _output_colored_path(out, path, num_bytes, num_errors, _path_color_of(path), byte_format)
        total += num_bytes
        result.num_errors += num_errors

    if stats.entries_traversed == 0:
        stats.smallest_file_in_bytes = 0

    if sort_by_size_in_bytes:
        for path, num_bytes, num_errors in sorted(aggregates, key=lambda item: item[1]):
            _output_colored_path(out, path, num_bytes, num_errors, _path_color_of(path), byte_format)

    if num_roots > 1 and compute_total:
        _output_colored_path(out, Path("total"), total, result.num_errors, None, byte_format)
    return result, stats


def _entry_size(
    entry: WalkEntry, options: WalkOptions, inodes: InodeFilter, device_id: int
) -> tuple[int, int]:
    """Return the size to count for ``entry`` and the number of errors met."""
    meta = entry.metadata
    if meta is None:
        return 0, int(entry.metadata_error is not None)
    if not (options.count_hard_links or inodes.add(meta)):
        return 0, 0
    if not (options.cross_filesystems or crossdev.is_same_device(device_id, meta)):
        return 0, 0
    if options.apparent_size:
        return meta.st_size, 0
    blocks = getattr(meta, "st_blocks", None)
    if blocks is None:
        return meta.st_size, 0
    return blocks * 512, 0


def _path_color_of(path: Path) -> str | None:
    return None if path.is_file() else _CYAN


def _output_colored_path(
    out: TextIO,
    path: Path,
    num_bytes: int,
    num_errors: int,
    path_color: str | None,
    byte_format: ByteFormat,
) -> None:
    size = byte_format.display(num_bytes)
    size_field = f"{_GREEN}{size:>{byte_format.width()}}{_RESET_FG}"
    errors = ""
    if num_errors:
        plural_s = "s" if num_errors > 1 else ""
        errors = f"  <{num_errors} IO Error{plural_s}>"
    shown = f"{path_color}{path}{_RESET_FG}" if path_color else str(path)
    out.write(f"{size_field} {shown}{errors}\n")