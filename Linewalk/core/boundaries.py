"""
Line boundary scanners.

Locate the first and last byte of the line containing the cursor by
scanning fixed-size windows backward or forward from it. Only the windows
between the cursor and the nearest terminator are read, never the whole
stream. In both directions the terminator closest to the cursor wins.
"""
from __future__ import annotations

import logging

from Linewalk.core.eol import move_after_eol, move_before_eol, move_end_of_eol, on_eol
from Linewalk.core.stream import DEFAULT_READ_CHUNK, ByteStream, find_first_eol, find_last_eol

logger = logging.getLogger(__name__)


def _check_chunk(read_chunk: int) -> None:
    if read_chunk < 1:
        raise ValueError(f"read_chunk must be >= 1, got {read_chunk}")


def line_start(stream: ByteStream, read_chunk: int = DEFAULT_READ_CHUNK) -> int:
    """
    Offset of the first byte of the line containing the cursor.

    The line's own terminator is skipped first, so a cursor resting on the
    CR or LF that ends a line still belongs to that line. At end-of-stream
    the cursor is first relocated to the true end; after a final terminator
    that position is an empty line of its own.

    Args:
        stream: Stream to navigate
        read_chunk: Window size for the backward scan

    Returns:
        The line start; the cursor is left there
    """
    _check_chunk(read_chunk)
    if stream.at_end():
        stream.move_to_end()

    origin = stream.tell()
    pos = move_before_eol(stream)
    if pos == 0:
        # step_back cannot leave offset 0, so a terminator there may still be
        # the cursor's own; it ends a previous line only if it ends before origin
        after = move_after_eol(stream)
        if after is not None and after <= origin:
            return after
        stream.seek(0)
        return 0

    # Windows end at, and include, the byte under the cursor
    hi = pos + 1
    while hi > 0:
        lo = max(0, hi - read_chunk)
        stream.seek(lo)
        window = stream.read(hi - lo)
        idx = find_last_eol(window)
        if idx != -1:
            logger.debug("line_start: terminator at %d (window %d-%d)", lo + idx, lo, hi)
            stream.seek(lo + idx)
            move_after_eol(stream)
            return stream.tell()
        hi = lo

    stream.seek(0)
    return 0


def line_end(stream: ByteStream, read_chunk: int = DEFAULT_READ_CHUNK) -> int:
    """
    Offset of the last byte of the line containing the cursor.

    The last byte is the final byte of the line's terminator (the LF of a
    CRLF pair). A line without terminator ends at the end-of-stream offset.

    Args:
        stream: Stream to navigate
        read_chunk: Window size for the forward scan

    Returns:
        The line end; the cursor is left there
    """
    _check_chunk(read_chunk)
    if stream.at_end():
        stream.move_to_end()
        return stream.tell()

    if on_eol(stream):
        move_end_of_eol(stream)
        return stream.tell()

    pos = stream.tell()
    while True:
        window = stream.read(read_chunk)
        if not window:
            break
        idx = find_first_eol(window)
        if idx != -1:
            logger.debug("line_end: terminator at %d", pos + idx)
            stream.seek(pos + idx)
            move_end_of_eol(stream)
            return stream.tell()
        pos += len(window)

    return stream.tell()


__all__ = ["line_start", "line_end"]
