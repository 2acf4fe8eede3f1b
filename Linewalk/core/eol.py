"""
End-of-line classification and cursor adjustment.

Three conventions are recognised: CRLF (Windows), LF (Unix) and lone CR
(classic Mac). CRLF is always matched greedily, so a CR directly followed
by LF is never a terminator of its own.
"""
from __future__ import annotations

import io
from enum import Enum
from typing import Optional

from Linewalk.core.stream import CR, EOL_BYTES, LF, ByteStream


class EolKind(Enum):
    """Line terminator convention."""
    CRLF = "crlf"
    CR = "cr"
    LF = "lf"

    @property
    def sequence(self) -> bytes:
        return {EolKind.CRLF: b"\r\n", EolKind.CR: b"\r", EolKind.LF: b"\n"}[self]

    @classmethod
    def of(cls, line: bytes) -> Optional["EolKind"]:
        """Terminator at the end of `line`, or None if it has none."""
        if line.endswith(b"\r\n"):
            return cls.CRLF
        if line.endswith(CR):
            return cls.CR
        if line.endswith(LF):
            return cls.LF
        return None


def on_eol(stream: ByteStream) -> bool:
    """True if the cursor rests on a CR or LF byte."""
    return stream.peek_byte() in EOL_BYTES


def classify_eol(stream: ByteStream) -> Optional[EolKind]:
    """
    Kind of the EOL sequence that starts at the cursor.

    Returns:
        EolKind, or None if the cursor is not on CR/LF. Cursor unchanged.
    """
    head = stream.peek_line(3)
    if not head:
        return None
    if head.startswith(b"\r\n"):
        return EolKind.CRLF
    if head.startswith(CR):
        return EolKind.CR
    if head.startswith(LF):
        return EolKind.LF
    return None


def move_before_eol(stream: ByteStream) -> int:
    """
    Step backward off the EOL sequence the cursor is resting on.

    On LF step back once, then on CR step back once more, so that CRLF,
    CR and LF are all skipped as a unit. Off an EOL the cursor stays put.

    Returns:
        The cursor offset afterwards
    """
    if stream.peek_byte() == LF:
        stream.step_back()
    if stream.peek_byte() == CR:
        stream.step_back()
    return stream.tell()


def move_end_of_eol(stream: ByteStream) -> Optional[int]:
    """
    Move from the first byte of an EOL sequence onto its last byte.

    Returns:
        The new offset, or None if the cursor is not on CR/LF
        (the cursor is then left where it was)
    """
    byte = stream.peek_byte()
    if byte == CR:
        stream.seek(1, io.SEEK_CUR)
        if stream.peek_byte() != LF:
            stream.step_back()
        return stream.tell()
    if byte == LF:
        return stream.tell()
    return None


def move_after_eol(stream: ByteStream) -> Optional[int]:
    """
    Move past the EOL sequence starting at the cursor.

    Lands on the first byte of the next line, or at end-of-stream.

    Returns:
        The new offset, or None if the cursor is not on CR/LF
    """
    if move_end_of_eol(stream) is None:
        return None
    stream.seek(1, io.SEEK_CUR)
    return stream.tell()


__all__ = [
    "EolKind",
    "on_eol",
    "classify_eol",
    "move_before_eol",
    "move_end_of_eol",
    "move_after_eol",
]
