"""The directed graph of filesystem entries and path reconstruction."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


@dataclass
class EntryData:
    """What is known about one filesystem entry."""

    name: Path = field(default_factory=Path)
    size: int = 0
    mtime: float = 0.0
    entry_count: int | None = None
    metadata_io_error: bool = False
    is_dir: bool = False


class Tree:
    """A directed graph whose node indices stay stable across removals.

    Freed indices are reused by later additions, most recently freed first.
    Neighbours are reported most recently connected first.
    """

    def __init__(self) -> None:
        self._weights: list[EntryData | None] = []
        self._outgoing: list[list[int]] = []
        self._incoming: list[list[int]] = []
        self._free: list[int] = []

    def add_node(self, weight: EntryData) -> int:
        if self._free:
            idx = self._free.pop()
            self._weights[idx] = weight
            return idx
        self._weights.append(weight)
        self._outgoing.append([])
        self._incoming.append([])
        return len(self._weights) - 1

    def add_edge(self, source: int, target: int) -> None:
        for idx in (source, target):
            if self.node_weight(idx) is None:
                raise IndexError(f"no node at index {idx}")
        self._outgoing[source].append(target)
        self._incoming[target].append(source)

    def remove_node(self, idx: int) -> EntryData | None:
        """Remove a node and all its edges, returning its weight if it existed."""
        weight = self.node_weight(idx)
        if weight is None:
            return None
        for target in self._outgoing[idx]:
            self._incoming[target] = [s for s in self._incoming[target] if s != idx]
        for source in self._incoming[idx]:
            self._outgoing[source] = [t for t in self._outgoing[source] if t != idx]
        self._outgoing[idx] = []
        self._incoming[idx] = []
        self._weights[idx] = None
        self._free.append(idx)
        return weight

    def node_weight(self, idx: int) -> EntryData | None:
        if 0 <= idx < len(self._weights):
            return self._weights[idx]
        return None

    def neighbors_outgoing(self, idx: int) -> Iterator[int]:
        if self.node_weight(idx) is None:
            return iter(())
        return iter(list(reversed(self._outgoing[idx])))

    def neighbors_incoming(self, idx: int) -> Iterator[int]:
        if self.node_weight(idx) is None:
            return iter(())
        return iter(list(reversed(self._incoming[idx])))

    def node_indices(self) -> Iterator[int]:
        return (idx for idx, weight in enumerate(self._weights) if weight is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self.node_indices())

    def __contains__(self, idx: object) -> bool:
        return isinstance(idx, int) and self.node_weight(idx) is not None


def get_entry(tree: Tree, node_idx: int) -> EntryData:
    """Return the entry at ``node_idx``, raising ``KeyError`` if there is none."""
    entry = tree.node_weight(node_idx)
    if entry is None:
        raise KeyError(f"no node at index {node_idx}")
    return entry


def path_of(tree: Tree, node_idx: int, glob_root: int | None = None) -> Path:
    """Build the path of ``node_idx`` from the names of its ancestors, skipping the root."""
    entries = []
    while True:
        parent = next(
            (p for p in tree.neighbors_incoming(node_idx) if p != glob_root), None
        )
        if parent is None:
            break
        entries.append(get_entry(tree, node_idx))
        node_idx = parent
    entries.append(get_entry(tree, node_idx))
    path = Path()
    for entry in reversed(entries[:-1]):
        path = path / entry.name
    return path