"""
Line stepping built on the boundary scanners.

Stepping never wraps around the stream: asking for the line before the
first one, or after the last one, returns None and leaves the cursor at
the start of the first/last line. A final terminator does not open a new
line, so "a\\n" has exactly one line.
"""
from __future__ import annotations

import logging
from typing import Optional

from Linewalk.core.boundaries import line_end, line_start
from Linewalk.core.eol import move_after_eol
from Linewalk.core.stream import DEFAULT_READ_CHUNK, ByteStream

logger = logging.getLogger(__name__)


def line_prev(stream: ByteStream, read_chunk: int = DEFAULT_READ_CHUNK) -> Optional[int]:
    """
    Move to the start of the previous line.

    Returns:
        The previous line's start offset, or None on the first line
        (the cursor is then at offset 0)
    """
    if line_start(stream, read_chunk) == 0:
        return None
    # Onto the last byte of the previous line's terminator
    stream.step_back()
    return line_start(stream, read_chunk)


def line_next(stream: ByteStream, read_chunk: int = DEFAULT_READ_CHUNK) -> Optional[int]:
    """
    Move to the start of the next line.

    Returns:
        The next line's start offset, or None on the last line
        (the cursor is then at the start of that line)
    """
    origin = stream.tell()
    line_end(stream, read_chunk)
    start = move_after_eol(stream)
    if start is None or stream.at_end():
        stream.seek(origin)
        line_start(stream, read_chunk)
        return None
    return start


def move_back(stream: ByteStream, n: int, read_chunk: int = DEFAULT_READ_CHUNK) -> int:
    """
    Step back up to `n` lines, stopping at the first line.

    Returns:
        Number of lines actually moved
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    moved = 0
    while moved < n:
        start = line_prev(stream, read_chunk)
        if start is None:
            break
        moved += 1
        if start == 0:
            break
    logger.debug("move_back: requested %d, moved %d", n, moved)
    return moved


def move_forward(stream: ByteStream, n: int, read_chunk: int = DEFAULT_READ_CHUNK) -> int:
    """
    Step forward up to `n` lines, stopping at the last line.

    Returns:
        Number of lines actually moved
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    moved = 0
    while moved < n:
        if line_next(stream, read_chunk) is None:
            break
        moved += 1
    logger.debug("move_forward: requested %d, moved %d", n, moved)
    return moved


__all__ = ["line_prev", "line_next", "move_back", "move_forward"]
