"""Disk usage analysis: size aggregation, byte formatting, a directory tree model and deletion."""

__version__ = "2.32.0"