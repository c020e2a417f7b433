"""Byte formatting, throttling and filesystem walking shared by all modes."""

from __future__ import annotations

import enum
import logging
import os
import stat
import threading
import time
import weakref
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from . import crossdev

log = logging.getLogger(__name__)

_METRIC_UNITS = ("KB", "MB", "GB", "TB", "PB", "EB", "ZB")
_BINARY_UNITS = ("KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB")


class ByteFormat(enum.Enum):
    """A way to format byte counts."""

    METRIC = "metric"
    BINARY = "binary"
    BYTES = "bytes"
    GB = "GB"
    GIB = "GiB"
    MB = "MB"
    MIB = "MiB"

    def width(self) -> int:
        """Width of the numeric part of a formatted size."""
        return _WIDTHS.get(self, 10)

    def total_width(self) -> int:
        """Width of a formatted size including its unit."""
        space_between_unit_and_number = 1
        if self in (ByteFormat.BINARY, ByteFormat.MIB, ByteFormat.GIB):
            unit = 3
        elif self is ByteFormat.BYTES:
            unit = 1
        else:
            unit = 2
        return self.width() + unit + space_between_unit_and_number

    def display(self, num_bytes: int) -> str:
        """Format ``num_bytes`` according to this format."""
        if self is ByteFormat.BYTES:
            return f"{num_bytes} b"
        fixed = _FIXED_UNITS.get(self)
        if fixed is not None:
            divisor, unit = fixed
            formatted = f"{num_bytes / divisor:.2f} {unit}"
        else:
            formatted = _appropriate_unit(num_bytes, binary=self is ByteFormat.BINARY)
        number, sep, unit = formatted.partition(" ")
        if not sep:
            return formatted
        unit_width = 3 if self is ByteFormat.BINARY else 2
        return f"{number} {unit:>{unit_width}}"


_WIDTHS = {
    ByteFormat.METRIC: 10,
    ByteFormat.BINARY: 11,
    ByteFormat.BYTES: 12,
    ByteFormat.MIB: 12,
    ByteFormat.MB: 12,
}

_FIXED_UNITS = {
    ByteFormat.GB: (1000**3, "GB"),
    ByteFormat.GIB: (1024**3, "GiB"),
    ByteFormat.MB: (1000**2, "MB"),
    ByteFormat.MIB: (1024**2, "MiB"),
}


def _appropriate_unit(num_bytes: int, binary: bool) -> str:
    base, units = (1024, _BINARY_UNITS) if binary else (1000, _METRIC_UNITS)
    if num_bytes < base:
        return f"{num_bytes} B"
    for exponent, unit in enumerate(units, start=1):
        if num_bytes < base ** (exponent + 1) or exponent == len(units):
            return f"{num_bytes / base**exponent:.2f} {unit}"
    raise AssertionError("unreachable")


class TraversalSorting(enum.Enum):
    """The kind of sorting applied during filesystem iteration."""

    NONE = "none"
    ALPHABETICAL_BY_FILE_NAME = "alphabetical-by-file-name"


class _Trigger:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = False

    def set(self) -> None:
        with self._lock:
            self._value = True

    def take(self) -> bool:
        with self._lock:
            value, self._value = self._value, False
            return value


def _tick(trigger_ref: weakref.ref, duration: float, initial_sleep: float | None) -> None:
    if initial_sleep is not None:
        time.sleep(initial_sleep)
    while True:
        trigger = trigger_ref()
        if trigger is None:
            return
        trigger.set()
        del trigger
        time.sleep(duration)


class Throttle:
    """Allows an action at most once per ``duration`` seconds."""

    def __init__(self, duration: float, initial_sleep: float | None = None) -> None:
        self._trigger = _Trigger()
        threading.Thread(
            target=_tick,
            args=(weakref.ref(self._trigger), duration, initial_sleep),
            name="throttle",
            daemon=True,
        ).start()

    def throttled(self, f: Callable[[], object]) -> None:
        """Call ``f`` only if not currently throttled."""
        if self.can_update():
            f()

    def can_update(self) -> bool:
        """Return True if we are not currently throttled."""
        return self._trigger.take()


@dataclass(frozen=True)
class WalkEntry:
    """One item produced by a filesystem walk.

    ``walk_error`` is set when the entry could not be produced at all, for
    instance when a directory could not be read. ``metadata_error`` is set
    when the entry exists but its metadata could not be obtained.
    """

    path: Path
    depth: int
    is_dir: bool = False
    metadata: os.stat_result | None = None
    metadata_error: OSError | None = None
    walk_error: OSError | None = None

    @property
    def ok(self) -> bool:
        return self.walk_error is None


@dataclass
class WalkOptions:
    """Configures a filesystem walk."""

    threads: int = 0
    count_hard_links: bool = False
    apparent_size: bool = False
    sorting: TraversalSorting = TraversalSorting.NONE
    cross_filesystems: bool = False
    ignore_dirs: frozenset[Path] = field(default_factory=frozenset)

    def iter_from_path(
        self, root: str | os.PathLike[str], root_device_id: int, skip_root: bool = False
    ) -> Iterator[WalkEntry]:
        """Walk ``root`` depth-first without following symbolic links."""
        root = Path(root)
        try:
            cwd = Path.cwd()
        except OSError:
            cwd = root
        try:
            meta = os.lstat(root)
        except OSError as exc:
            yield WalkEntry(path=root, depth=0, walk_error=exc)
            return
        root_entry = WalkEntry(
            path=root, depth=0, is_dir=stat.S_ISDIR(meta.st_mode), metadata=meta
        )
        min_depth = 1 if skip_root else 0
        yield from self._walk(root_entry, root_device_id, cwd, min_depth)

    def _walk(
        self, entry: WalkEntry, root_device_id: int, cwd: Path, min_depth: int
    ) -> Iterator[WalkEntry]:
        if entry.depth >= min_depth:
            yield entry
        if not self._should_descend(entry, root_device_id, cwd):
            return
        try:
            with os.scandir(entry.path) as it:
                children = list(it)
        except OSError as exc:
            yield WalkEntry(path=entry.path, depth=entry.depth + 1, walk_error=exc)
            return
        if self.sorting is TraversalSorting.ALPHABETICAL_BY_FILE_NAME:
            children.sort(key=lambda child: child.name)
        for child in children:
            yield from self._walk(
                _child_entry(child, entry.depth + 1), root_device_id, cwd, min_depth
            )

    def _should_descend(self, entry: WalkEntry, root_device_id: int, cwd: Path) -> bool:
        if not entry.is_dir:
            return False
        ok_for_fs = (
            self.cross_filesystems
            or entry.metadata is None
            or crossdev.is_same_device(root_device_id, entry.metadata)
        )
        return ok_for_fs and not ignore_directory(entry.path, self.ignore_dirs, cwd)


def _child_entry(child: os.DirEntry, depth: int) -> WalkEntry:
    try:
        is_dir = child.is_dir(follow_symlinks=False)
    except OSError:
        is_dir = False
    path = Path(child.path)
    try:
        meta = child.stat(follow_symlinks=False)
    except OSError as exc:
        return WalkEntry(path=path, depth=depth, is_dir=is_dir, metadata_error=exc)
    return WalkEntry(path=path, depth=depth, is_dir=is_dir, metadata=meta)


@dataclass
class WalkResult:
    """Information gathered during a filesystem walk."""

    num_errors: int = 0

    def to_exit_code(self) -> int:
        return int(self.num_errors > 0)


def canonicalize_ignore_dirs(ignore_dirs: Iterable[str | os.PathLike[str]]) -> frozenset[Path]:
    """Resolve ``ignore_dirs`` to real, absolute paths."""
    dirs = set()
    for directory in ignore_dirs:
        try:
            dirs.add(Path(os.path.realpath(directory)))
        except (OSError, ValueError):
            continue
    log.info("Ignoring canonicalized %s", sorted(dirs))
    return frozenset(dirs)


def ignore_directory(
    path: str | os.PathLike[str], ignore_dirs: frozenset[Path] | set[Path], cwd: str | os.PathLike[str]
) -> bool:
    """Return True if ``path``, resolved against ``cwd``, is among ``ignore_dirs``."""
    if not ignore_dirs:
        return False
    try:
        resolved = Path(os.path.realpath(os.path.join(cwd, path)))
    except (OSError, ValueError):
        return False
    ignored = resolved in ignore_dirs
    if ignored:
        log.debug("Ignored %s", resolved)
    return ignored