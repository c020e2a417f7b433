import os
from pathlib import Path

import pytest

from duatool.entries import EntryCheck, SortMode
from duatool.tree import EntryData, Tree
from duatool.tree_view import TreeView


def build():
    tree = Tree()
    root = tree.add_node(EntryData(name=Path("")))
    top = tree.add_node(EntryData(name=Path("top"), is_dir=True))
    tree.add_edge(root, top)
    sub = tree.add_node(EntryData(name=Path("sub"), is_dir=True))
    tree.add_edge(top, sub)
    leaf_a = tree.add_node(EntryData(name=Path("a"), size=100))
    tree.add_edge(sub, leaf_a)
    leaf_b = tree.add_node(EntryData(name=Path("b"), size=28))
    tree.add_edge(sub, leaf_b)
    leaf_c = tree.add_node(EntryData(name=Path("c"), size=5))
    tree.add_edge(top, leaf_c)
    return tree, dict(root=root, top=top, sub=sub, a=leaf_a, b=leaf_b, c=leaf_c)


def with_glob(tree, nodes):
    glob = tree.add_node(EntryData())
    tree.add_edge(glob, nodes["a"])
    return glob


def test_fs_parent_ignores_glob_root():
    tree, n = build()
    glob = with_glob(tree, n)
    view = TreeView(tree, n["root"], glob)
    assert view.fs_parent_of(n["a"]) == n["sub"]
    assert view.fs_parent_of(n["root"]) is None


def test_view_parent_prefers_glob_root():
    tree, n = build()
    glob = with_glob(tree, n)
    assert TreeView(tree, n["root"], glob).view_parent_of(n["a"]) == glob
    assert TreeView(tree, n["root"]).view_parent_of(n["sub"]) == n["top"]
    assert TreeView(tree, n["root"], glob).view_parent_of(n["sub"]) == n["top"]


def test_path_of_and_current_path():
    tree, n = build()
    view = TreeView(tree, n["root"])
    assert view.path_of(n["a"]) == Path("top") / "sub" / "a"
    assert view.current_path(n["sub"]) == str(Path("top") / "sub")
    assert view.current_path(n["root"]) == os.path.realpath(".")


def test_path_of_skips_glob_root():
    tree, n = build()
    glob = with_glob(tree, n)
    view = TreeView(tree, n["root"], glob)
    assert view.path_of(n["a"]) == Path("top") / "sub" / "a"


def test_sorted_entries_delegates():
    tree, n = build()
    view = TreeView(tree, n["root"])
    entries = view.sorted_entries(n["sub"], SortMode.SIZE_DESCENDING, EntryCheck.DISABLED)
    assert [e.index for e in entries] == [n["a"], n["b"]]
    ascending = view.sorted_entries(n["sub"], SortMode.SIZE_ASCENDING, EntryCheck.DISABLED)
    assert [e.index for e in ascending] == [n["b"], n["a"]]


def test_remove_entries_including_root():
    tree, n = build()
    view = TreeView(tree, n["root"])
    assert view.remove_entries(n["sub"], True) == 3
    assert not view.exists(n["sub"])
    assert not view.exists(n["a"])
    assert view.exists(n["top"])
    assert list(tree.neighbors_outgoing(n["top"])) == [n["c"]]


def test_remove_entries_keeping_root():
    tree, n = build()
    view = TreeView(tree, n["root"])
    assert view.remove_entries(n["sub"], False) == 2
    assert view.exists(n["sub"])
    assert list(tree.neighbors_outgoing(n["sub"])) == []


def test_recompute_sizes_updates_ancestors():
    tree, n = build()
    view = TreeView(tree, n["root"])
    view.recompute_sizes_recursively(n["sub"])
    sub = tree.node_weight(n["sub"])
    top = tree.node_weight(n["top"])
    root = tree.node_weight(n["root"])
    assert sub.size == tree.node_weight(n["a"]).size + tree.node_weight(n["b"]).size
    assert sub.entry_count == 2
    assert top.size == sub.size + tree.node_weight(n["c"]).size
    assert top.entry_count == sub.entry_count + 1
    assert root.size == top.size
    assert view.total_size() == top.size


def test_recompute_after_removal():
    tree, n = build()
    view = TreeView(tree, n["root"])
    view.recompute_sizes_recursively(n["sub"])
    view.remove_entries(n["sub"], True)
    view.recompute_sizes_recursively(n["top"])
    assert tree.node_weight(n["top"]).size == tree.node_weight(n["c"]).size
    assert tree.node_weight(n["top"]).entry_count == 1


def test_recompute_empty_directory_has_zero_count():
    tree, n = build()
    view = TreeView(tree, n["root"])
    view.remove_entries(n["sub"], False)
    view.recompute_sizes_recursively(n["sub"])
    assert tree.node_weight(n["sub"]).size == 0
    assert tree.node_weight(n["sub"]).entry_count == 0


def test_recompute_missing_node_raises():
    tree, n = build()
    view = TreeView(tree, n["root"])
    with pytest.raises(KeyError):
        view.recompute_sizes_recursively(999)