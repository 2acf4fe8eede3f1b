"""
Backward reads.

Mirror images of read_byte/read_line: they return what lies at and behind
the cursor and leave the cursor in front of it, so that repeated calls walk
the stream towards offset 0. Consuming the byte at offset 0 puts the stream
into its before-start state, after which both functions return None.
"""
from __future__ import annotations

import logging
from typing import Optional

from Linewalk.core.boundaries import line_start
from Linewalk.core.stream import DEFAULT_READ_CHUNK, ByteStream

logger = logging.getLogger(__name__)


def unget_byte(stream: ByteStream) -> Optional[bytes]:
    """
    Return the byte under the cursor and step one byte back.

    At end-of-stream None is returned and the cursor still steps back,
    onto the last byte.
    """
    if stream.before_start:
        return None
    byte = stream.peek_byte()
    if not stream.step_back():
        stream.mark_before_start()
    return byte


def unget_line(
    stream: ByteStream,
    max_len: int = 0,
    read_chunk: int = DEFAULT_READ_CHUNK,
) -> Optional[bytes]:
    """
    Return the current line up to and including the cursor byte.

    At end-of-stream the last byte of the stream is taken as the cursor
    byte. Afterwards the cursor sits one byte before the returned text,
    which is normally the last byte of the previous line's terminator.

    Args:
        stream: Stream to read
        max_len: When > 0, return at most `max_len - 1` bytes, keeping
            those nearest the cursor
        read_chunk: Window size for the line start scan

    Returns:
        The line bytes, or None if the stream is empty, already before
        its start, or max_len is 1 (no room for a byte)
    """
    if max_len < 0:
        raise ValueError(f"max_len must be >= 0, got {max_len}")
    if stream.before_start or max_len == 1:
        return None

    end = stream.tell_end()
    if end == 0:
        return None
    origin = min(stream.tell(), end - 1)
    stream.seek(origin)

    start = line_start(stream, read_chunk)
    if max_len:
        start = max(start, origin + 1 - (max_len - 1))
    stream.seek(start)
    data = stream.read(origin + 1 - start)

    if start == 0:
        stream.mark_before_start()
    else:
        stream.seek(start - 1)
    logger.debug("unget_line: %d bytes from %d-%d", len(data), start, origin)
    return data


__all__ = ["unget_byte", "unget_line"]
