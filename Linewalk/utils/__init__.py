"""
Linewalk utilities package.

Provides file-level helpers on top of the navigation engine.
"""
from __future__ import annotations

from Linewalk.utils.file_loader import (
    iter_lines,
    iter_records,
    line_at,
    looks_binary,
    open_navigator,
    sniff_binary,
    tail_lines,
    walk_file,
)

__all__ = [
    "iter_lines",
    "iter_records",
    "line_at",
    "looks_binary",
    "open_navigator",
    "sniff_binary",
    "tail_lines",
    "walk_file",
]
