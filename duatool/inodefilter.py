"""Filter that lets each hard-linked inode be counted only once."""

from __future__ import annotations

import os


class InodeFilter:
    """Remembers multiply-linked inodes until all of their links have been seen."""

    def __init__(self) -> None:
        self._remaining: dict[tuple[int, int], int] = {}

    def add(self, metadata: os.stat_result) -> bool:
        """Return True if the entry described by ``metadata`` should be counted."""
        if not metadata.st_ino:
            return True
        return self.add_dev_inode((metadata.st_dev, metadata.st_ino), metadata.st_nlink)

    def add_dev_inode(self, dev_inode: tuple[int, int], nlinks: int) -> bool:
        """Return True the first time a device/inode pair is seen."""
        if nlinks <= 1:
            return True
        remaining = self._remaining.get(dev_inode)
        if remaining is None:
            self._remaining[dev_inode] = nlinks - 1
            return True
        if remaining == 1:
            del self._remaining[dev_inode]
        else:
            self._remaining[dev_inode] = remaining - 1
        return False

    def __len__(self) -> int:
        return len(self._remaining)