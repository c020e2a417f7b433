"""Visualisation of a share of bytes as a percentage and/or a bar."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from .common import ByteFormat

_FULL = "█"
_BLOCK_SECTIONS = (" ", "▏", "▎", "▍", "▌", "▋", "▊", "▉", _FULL)
_BAR_SIZE = 10
_LONG_BAR_SIZE = 19


class ByteVisualization(enum.Enum):
    """How the share of a size is drawn; ``PERCENTAGE_AND_BAR`` is the default."""

    PERCENTAGE = "percentage"
    BAR = "bar"
    LONG_BAR = "long-bar"
    PERCENTAGE_AND_BAR = "percentage-and-bar"

    def cycled(self) -> ByteVisualization:
        """Return the next visualisation in the cycle."""
        return _CYCLE[self]

    def display(self, percentage: float) -> str:
        """Render ``percentage`` (a fraction, 1.0 being all) in this style."""
        if math.isnan(percentage):
            percentage = 0.0
        if self is ByteVisualization.PERCENTAGE:
            return _percentage(percentage)
        if self is ByteVisualization.PERCENTAGE_AND_BAR:
            return f"{_percentage(percentage)} {_bar(percentage, _BAR_SIZE)}"
        if self is ByteVisualization.BAR:
            return _bar(percentage, _BAR_SIZE)
        return _bar(percentage, _LONG_BAR_SIZE)


_CYCLE = {
    ByteVisualization.BAR: ByteVisualization.LONG_BAR,
    ByteVisualization.LONG_BAR: ByteVisualization.PERCENTAGE_AND_BAR,
    ByteVisualization.PERCENTAGE_AND_BAR: ByteVisualization.PERCENTAGE,
    ByteVisualization.PERCENTAGE: ByteVisualization.BAR,
}


def _percentage(percentage: float) -> str:
    return f" {percentage * 100.0:>5.1f}% "


def _bar(percentage: float, length: int) -> str:
    filled = length * percentage
    block_length = max(0, math.floor(filled))
    bar = _FULL * block_length
    if block_length < length:
        index = max(0, math.floor((filled - block_length) * 8 + 0.5))
        bar += _BLOCK_SECTIONS[index] + " " * (length - block_length - 1)
    return bar


@dataclass
class DisplayOptions:
    """Options configuring how sizes are displayed."""

    byte_format: ByteFormat
    byte_vis: ByteVisualization = ByteVisualization.PERCENTAGE_AND_BAR