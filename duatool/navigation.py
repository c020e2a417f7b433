"""Cursor movement and the position within the tree being viewed."""

from __future__ import annotations

import enum
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from .entries import EntryDataBundle

_PAGE = 10


class CursorDirection(enum.Enum):
    """A direction in which the selection cursor moves."""

    PAGE_DOWN = "page-down"
    DOWN = "down"
    UP = "up"
    PAGE_UP = "page-up"
    TO_TOP = "to-top"
    TO_BOTTOM = "to-bottom"

    def move_cursor(self, n: int) -> int:
        """Return the position reached from position ``n``, never below zero."""
        if self is CursorDirection.TO_TOP:
            return 0
        if self is CursorDirection.TO_BOTTOM:
            return sys.maxsize
        if self is CursorDirection.DOWN:
            return n + 1
        if self is CursorDirection.UP:
            return max(0, n - 1)
        if self is CursorDirection.PAGE_DOWN:
            return n + _PAGE
        return max(0, n - _PAGE)


def _position(entries: Sequence[EntryDataBundle], index: int) -> int | None:
    return next((pos for pos, b in enumerate(entries) if b.index == index), None)


@dataclass
class Navigation:
    """Where the user is in the tree and what was selected in each visited directory."""

    tree_root: int = 0
    view_root: int = 0
    selected: int | None = None
    bookmarks: dict[int, int] = field(default_factory=dict)

    def previously_selected_index(
        self, view_root: int, entries: Sequence[EntryDataBundle]
    ) -> int | None:
        """Return the bookmarked selection for ``view_root``, or the first entry."""
        bookmarked = self.bookmarks.get(view_root)
        pos = 0
        if bookmarked is not None:
            found = _position(entries, bookmarked)
            if found is not None:
                pos = found
        return entries[pos].index if pos < len(entries) else None

    def enter_node(self, previously_selected: int, new_selected: int) -> None:
        self.bookmarks[self.view_root] = previously_selected
        self.view_root = previously_selected
        self.selected = new_selected

    def exit_node(self, parent_idx: int, entries: Sequence[EntryDataBundle]) -> None:
        self.view_root = parent_idx
        bookmarked = self.bookmarks.get(parent_idx)
        if bookmarked is not None:
            self.selected = bookmarked
        else:
            self.selected = entries[0].index if entries else None

    def next_index(
        self, direction: CursorDirection, entries: Sequence[EntryDataBundle]
    ) -> int | None:
        """Return the index selected after moving in ``direction``, clamped to the entries."""
        pos = 0
        if self.selected is not None:
            found = _position(entries, self.selected)
            if found is not None:
                pos = direction.move_cursor(found)
        if pos < len(entries):
            return entries[pos].index
        if entries:
            return entries[-1].index
        return self.selected

    def select(self, selected: int | None) -> None:
        self.selected = selected
        if selected is not None:
            self.bookmarks[self.view_root] = selected