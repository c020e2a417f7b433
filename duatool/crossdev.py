"""Helpers to tell whether filesystem entries live on the same device."""

from __future__ import annotations

import os

_HAS_DEVICE_IDS = os.name == "posix"


def init(path: str | os.PathLike[str]) -> int:
    """Return the device id of ``path``, raising ``OSError`` if it cannot be read."""
    if not _HAS_DEVICE_IDS:
        return 0
    return os.stat(path).st_dev


def is_same_device(device_id: int, meta: os.stat_result) -> bool:
    """Return True if ``meta`` belongs to the device identified by ``device_id``."""
    if not _HAS_DEVICE_IDS:
        return True
    return meta.st_dev == device_id