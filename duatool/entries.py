"""Listing, sorting and fitting of the entries shown for one directory."""

from __future__ import annotations

import enum
import os
import stat
from dataclasses import dataclass
from pathlib import Path

import regex

from .tree import Tree, path_of

_ELLIPSIS = "…"
_GRAPHEME = regex.compile(r"\X")


class SortMode(enum.Enum):
    """How the entries of a directory are ordered; ``SIZE_DESCENDING`` is the default."""

    SIZE_DESCENDING = "size-descending"
    SIZE_ASCENDING = "size-ascending"
    MTIME_DESCENDING = "mtime-descending"
    MTIME_ASCENDING = "mtime-ascending"
    COUNT_DESCENDING = "count-descending"
    COUNT_ASCENDING = "count-ascending"
    NAME_DESCENDING = "name-descending"
    NAME_ASCENDING = "name-ascending"

    def toggled_size(self) -> SortMode:
        """Flip the size direction, or switch to size sorting, descending."""
        if self is SortMode.SIZE_DESCENDING:
            return SortMode.SIZE_ASCENDING
        return SortMode.SIZE_DESCENDING

    def toggled_mtime(self) -> SortMode:
        """Flip the mtime direction, or switch to mtime sorting, descending."""
        if self is SortMode.MTIME_DESCENDING:
            return SortMode.MTIME_ASCENDING
        return SortMode.MTIME_DESCENDING

    def toggled_count(self) -> SortMode:
        """Flip the count direction, or switch to count sorting, descending."""
        if self is SortMode.COUNT_DESCENDING:
            return SortMode.COUNT_ASCENDING
        return SortMode.COUNT_DESCENDING

    def toggled_name(self) -> SortMode:
        """Flip the name direction, or switch to name sorting, ascending."""
        if self is SortMode.NAME_ASCENDING:
            return SortMode.NAME_DESCENDING
        return SortMode.NAME_ASCENDING


@dataclass
class EntryDataBundle:
    """One entry as displayed in a directory listing."""

    index: int
    name: Path
    size: int
    mtime: float
    entry_count: int | None
    is_dir: bool
    exists: bool


class EntryCheck(enum.Enum):
    """Whether listed entries are checked for presence on disk."""

    POSSIBLY_COSTLY_LSTAT = "possibly-costly-lstat"
    DISABLED = "disabled"

    @classmethod
    def from_state(cls, is_scanning: bool, allow_entry_check: bool) -> EntryCheck:
        if allow_entry_check and not is_scanning:
            return cls.POSSIBLY_COSTLY_LSTAT
        return cls.DISABLED


def _count_key(bundle: EntryDataBundle) -> tuple:
    count = bundle.entry_count
    return (count is not None, count or 0, bundle.name)


def _name_key(bundle: EntryDataBundle) -> tuple:
    return (not bundle.is_dir, bundle.name)


_SORT_KEYS = {
    SortMode.SIZE_DESCENDING: (lambda b: b.size, True),
    SortMode.SIZE_ASCENDING: (lambda b: b.size, False),
    SortMode.MTIME_DESCENDING: (lambda b: b.mtime, True),
    SortMode.MTIME_ASCENDING: (lambda b: b.mtime, False),
    SortMode.COUNT_DESCENDING: (_count_key, True),
    SortMode.COUNT_ASCENDING: (_count_key, False),
    SortMode.NAME_DESCENDING: (_name_key, True),
    SortMode.NAME_ASCENDING: (_name_key, False),
}


def _presence(path: Path) -> tuple[bool, bool]:
    try:
        meta = os.lstat(path)
    except OSError:
        return False, False
    return True, stat.S_ISDIR(meta.st_mode)


def sorted_entries(
    tree: Tree,
    node_idx: int,
    sorting: SortMode,
    glob_root: int | None,
    check: EntryCheck,
) -> list[EntryDataBundle]:
    """Return the children of ``node_idx`` ordered by ``sorting``.

    When listing the glob root itself, entries are named by their full path
    and never checked on disk, so large result sets stay cheap.
    """
    listing_glob_root = glob_root is not None and glob_root == node_idx
    bundles = []
    for idx in tree.neighbors_outgoing(node_idx):
        entry = tree.node_weight(idx)
        if entry is None:
            continue
        path = path_of(tree, idx, glob_root)
        if check is EntryCheck.DISABLED or listing_glob_root:
            exists, is_dir = True, entry.is_dir
        else:
            exists, is_dir = _presence(path)
        bundles.append(
            EntryDataBundle(
                index=idx,
                name=path if listing_glob_root else entry.name,
                size=entry.size,
                mtime=entry.mtime,
                entry_count=entry.entry_count,
                is_dir=is_dir,
                exists=exists,
            )
        )
    key, reverse = _SORT_KEYS[sorting]
    return sorted(bundles, key=key, reverse=reverse)


def fit_string_graphemes_with_ellipsis(
    s: str, path_graphemes_count: int, desired_graphemes: int
) -> tuple[str, int]:
    """Shorten ``s`` from the left to ``desired_graphemes``, marking the cut with an ellipsis.

    Returns the fitted string and its length in graphemes.
    """
    min_len = 2
    desired_graphemes = max(desired_graphemes, min_len)
    if path_graphemes_count <= desired_graphemes:
        return s, path_graphemes_count
    to_be_removed = path_graphemes_count - desired_graphemes + 1
    graphemes = _GRAPHEME.findall(s)
    return _ELLIPSIS + "".join(graphemes[to_be_removed:]), desired_graphemes