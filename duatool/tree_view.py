"""A view onto the entry tree that knows about an optional glob-result root."""

from __future__ import annotations

import os
from collections import deque
from dataclasses import dataclass
from pathlib import Path

from .entries import EntryCheck, EntryDataBundle, SortMode, sorted_entries
from .tree import Tree, get_entry, path_of


@dataclass
class TreeView:
    """The traversal tree as seen by the user.

    ``root_index`` is the virtual root holding all scanned paths.
    ``glob_tree_root``, if set, is an extra node whose children are glob
    search results; it is never treated as a filesystem parent.
    """

    tree: Tree
    root_index: int
    glob_tree_root: int | None = None

    def fs_parent_of(self, idx: int) -> int | None:
        """Return the parent of ``idx`` on the filesystem, ignoring the glob root."""
        return next(
            (
                parent
                for parent in self.tree.neighbors_incoming(idx)
                if self.glob_tree_root is None or parent != self.glob_tree_root
            ),
            None,
        )

    def view_parent_of(self, idx: int) -> int | None:
        """Return the parent to go to when leaving ``idx``, preferring the glob root."""
        parents = list(self.tree.neighbors_incoming(idx))
        if self.glob_tree_root is not None and self.glob_tree_root in parents:
            return self.glob_tree_root
        return parents[0] if parents else None

    def path_of(self, node_idx: int) -> Path:
        return path_of(self.tree, node_idx, self.glob_tree_root)

    def sorted_entries(
        self, view_root: int, sorting: SortMode, check: EntryCheck
    ) -> list[EntryDataBundle]:
        return sorted_entries(self.tree, view_root, sorting, self.glob_tree_root, check)

    def current_path(self, view_root: int) -> str:
        """Return the path of ``view_root``, or the current directory for the root."""
        path = self.path_of(view_root)
        if path != Path():
            return str(path)
        try:
            return os.path.realpath(".")
        except OSError:
            return "."

    def remove_entries(self, root_index: int, remove_root_node: bool) -> int:
        """Remove ``root_index`` and everything below it; return the number removed.

        With ``remove_root_node`` false the node at ``root_index`` itself stays.
        """
        removed = 0
        discovered = {root_index}
        queue = deque([root_index])
        while queue:
            node = queue.popleft()
            for child in self.tree.neighbors_outgoing(node):
                if child not in discovered:
                    discovered.add(child)
                    queue.append(child)
            if node == root_index and not remove_root_node:
                continue
            self.tree.remove_node(node)
            removed += 1
        return removed

    def exists(self, idx: int) -> bool:
        return self.tree.node_weight(idx) is not None

    def total_size(self) -> int:
        """Return the combined size of all top-level entries."""
        return sum(
            weight.size
            for weight in map(self.tree.node_weight, self.tree.neighbors_outgoing(self.root_index))
            if weight is not None
        )

    def recompute_sizes_recursively(self, index: int) -> None:
        """Recompute size and entry count of ``index`` and each of its ancestors."""
        current: int | None = index
        while current is not None:
            size = 0
            count = 0
            for child in self.tree.neighbors_outgoing(current):
                weight = self.tree.node_weight(child)
                if weight is None:
                    continue
                size += weight.size
                count += 1 if weight.entry_count is None else weight.entry_count
            node = get_entry(self.tree, current)
            node.size = size
            node.entry_count = count
            current = self.fs_parent_of(current)