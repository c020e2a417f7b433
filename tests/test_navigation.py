from pathlib import Path

import pytest

from duatool.entries import EntryDataBundle
from duatool.navigation import CursorDirection, Navigation


def _bundles(*indices):
    return [
        EntryDataBundle(
            index=i, name=Path(f"e{i}"), size=0, mtime=0.0, entry_count=None, is_dir=False, exists=True
        )
        for i in indices
    ]


@pytest.mark.parametrize("n", [0, 1, 5, 42])
def test_move_cursor_invariants(n):
    assert CursorDirection.TO_TOP.move_cursor(n) == 0
    assert CursorDirection.TO_BOTTOM.move_cursor(n) > n
    assert CursorDirection.UP.move_cursor(CursorDirection.DOWN.move_cursor(n)) == n
    assert CursorDirection.PAGE_DOWN.move_cursor(n) - n == 10
    assert CursorDirection.UP.move_cursor(n) >= 0
    assert CursorDirection.PAGE_UP.move_cursor(n) >= 0


def test_move_cursor_saturates_at_zero():
    assert CursorDirection.UP.move_cursor(0) == 0
    assert CursorDirection.PAGE_UP.move_cursor(3) == 0


def test_next_index_moves_and_clamps():
    entries = _bundles(7, 8, 9)
    nav = Navigation(selected=7)
    assert nav.next_index(CursorDirection.DOWN, entries) == 8
    nav.selected = 9
    assert nav.next_index(CursorDirection.DOWN, entries) == 9
    assert nav.next_index(CursorDirection.TO_TOP, entries) == 7
    nav.selected = 7
    assert nav.next_index(CursorDirection.UP, entries) == 7
    assert nav.next_index(CursorDirection.TO_BOTTOM, entries) == 9


def test_next_index_without_selection_starts_at_top():
    nav = Navigation()
    assert nav.next_index(CursorDirection.PAGE_DOWN, _bundles(4, 5)) == 4


def test_next_index_with_no_entries_keeps_selection():
    nav = Navigation(selected=3)
    assert nav.next_index(CursorDirection.DOWN, []) == 3


def test_select_records_bookmark():
    nav = Navigation(view_root=2)
    nav.select(5)
    assert nav.selected == 5
    assert nav.bookmarks == {2: 5}
    nav.select(None)
    assert nav.selected is None
    assert nav.bookmarks == {2: 5}


def test_enter_and_exit_restore_selection():
    nav = Navigation(tree_root=0, view_root=0, selected=3)
    nav.enter_node(3, 11)
    assert nav.view_root == 3
    assert nav.selected == 11
    assert nav.bookmarks[0] == 3
    nav.exit_node(0, _bundles(1, 3))
    assert nav.view_root == 0
    assert nav.selected == 3


def test_exit_without_bookmark_selects_first_entry():
    nav = Navigation(view_root=4)
    nav.exit_node(1, _bundles(6, 2))
    assert nav.selected == 6
    nav.exit_node(9, [])
    assert nav.selected is None


def test_previously_selected_index():
    entries = _bundles(10, 11, 12)
    nav = Navigation(bookmarks={1: 12, 2: 99})
    assert nav.previously_selected_index(1, entries) == 12
    assert nav.previously_selected_index(2, entries) == 10
    assert nav.previously_selected_index(3, entries) == 10
    assert nav.previously_selected_index(1, []) is None