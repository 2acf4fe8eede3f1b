"""
Seekable byte stream with a single cursor.

Wraps a binary file object and provides the position primitives the line
navigation engine is built on:
- peeking a byte or a line without consuming it
- end-of-stream checks derived from the current length on every call
- one-byte backward steps that never wrap below offset 0

The cursor is the file object's own position; ByteStream keeps no copy of it.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, BinaryIO, Optional

logger = logging.getLogger(__name__)

CR = b"\r"
LF = b"\n"
EOL_BYTES = (CR, LF)

DEFAULT_READ_CHUNK = 64


def find_first_eol(data: bytes) -> int:
    """
    Index of the first CR or LF in `data`, or -1.

    Examples:
        >>> find_first_eol(b"ab\\ncd\\r")
        2
        >>> find_first_eol(b"abc")
        -1
    """
    hits = [i for i in (data.find(CR), data.find(LF)) if i != -1]
    return min(hits) if hits else -1


def find_last_eol(data: bytes) -> int:
    """
    Index of the last CR or LF in `data`, or -1.

    Examples:
        >>> find_last_eol(b"a\\r\\nb")
        2
        >>> find_last_eol(b"a\\rb")
        1
    """
    return max(data.rfind(CR), data.rfind(LF))


class ByteStream:
    """
    A binary, seekable stream and its cursor.

    Attributes:
        name: Display name (file path or "<bytes>")
        encoding: Encoding used when record fields are decoded
        errors: Decoding error handler
        read_chunk: Window size for chunked reads
    """

    def __init__(
        self,
        handle: BinaryIO,
        *,
        name: Optional[str] = None,
        encoding: str = "utf-8",
        errors: str = "replace",
        read_chunk: int = DEFAULT_READ_CHUNK,
        owns_handle: bool = False,
    ) -> None:
        if read_chunk < 1:
            raise ValueError(f"read_chunk must be >= 1, got {read_chunk}")
        if not handle.seekable():
            raise ValueError("Stream must be seekable")
        self._handle = handle
        self._owns_handle = owns_handle
        self._before_start = False
        self.name = name or getattr(handle, "name", None) or "<stream>"
        self.encoding = encoding
        self.errors = errors
        self.read_chunk = read_chunk

    @classmethod
    def open(cls, path: str | Path, mode: str = "rb", **kwargs: Any) -> "ByteStream":
        """Open `path` in binary mode. The stream owns and closes the handle."""
        if "b" not in mode:
            raise ValueError(f"ByteStream requires a binary mode, got {mode!r}")
        handle = open(path, mode)
        logger.debug("Opened %s (mode=%s)", path, mode)
        try:
            return cls(handle, name=str(path), owns_handle=True, **kwargs)
        except BaseException:
            handle.close()
            raise

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs: Any) -> "ByteStream":
        """Stream over an in-memory copy of `data`."""
        kwargs.setdefault("name", "<bytes>")
        return cls(io.BytesIO(data), owns_handle=True, **kwargs)

    def __enter__(self) -> "ByteStream":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._owns_handle:
            self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"pos={self.tell()}"
        return f"{self.__class__.__name__}({self.name!r}, {state})"

    @property
    def handle(self) -> BinaryIO:
        return self._handle

    @property
    def closed(self) -> bool:
        return self._handle.closed

    @property
    def before_start(self) -> bool:
        """
        True after a backward read consumed the byte at offset 0.

        The cursor itself stays at 0. Any seek or read clears the state.
        """
        return self._before_start

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()

    # Cursor movement

    def tell(self) -> int:
        return self._handle.tell()

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._before_start = False
        return self._handle.seek(offset, whence)

    def step_back(self) -> bool:
        """Move the cursor one byte back. No-op returning False at offset 0."""
        pos = self.tell()
        if pos <= 0:
            return False
        self.seek(pos - 1)
        return True

    def move_to_start(self) -> bool:
        self.seek(0)
        return True

    def move_to_end(self) -> bool:
        self.seek(0, io.SEEK_END)
        return True

    def mark_before_start(self) -> None:
        """Park the cursor at 0 in the before-start state."""
        self._handle.seek(0)
        self._before_start = True

    # Reads

    def read(self, size: int = -1) -> bytes:
        self._before_start = False
        return self._handle.read(size)

    def read_byte(self) -> Optional[bytes]:
        """Consume one byte. Returns None at end-of-stream."""
        return self.read(1) or None

    def read_line(self, max_len: int = 0) -> Optional[bytes]:
        """
        Consume one line.

        Reads until whichever comes first:
            - `max_len - 1` bytes (when max_len > 0)
            - a line terminator, inclusive (CRLF is taken as one terminator)
            - end-of-stream

        Returns:
            The bytes read, or None if the cursor was at end-of-stream
        """
        if max_len < 0:
            raise ValueError(f"max_len must be >= 0, got {max_len}")
        self._before_start = False
        start = self.tell()
        limit = max_len - 1 if max_len else None
        buf = bytearray()

        while limit is None or len(buf) < limit:
            size = self.read_chunk if limit is None else min(self.read_chunk, limit - len(buf))
            chunk = self._handle.read(size)
            if not chunk:
                break
            idx = find_first_eol(chunk)
            if idx == -1:
                buf += chunk
                continue
            buf += chunk[: idx + 1]
            self._handle.seek(start + len(buf))
            # A CR at the end of the taken bytes may be the first half of CRLF
            if chunk[idx:idx + 1] == CR and (limit is None or len(buf) < limit):
                if self._handle.read(1) == LF:
                    buf += LF
                else:
                    self._handle.seek(start + len(buf))
            break

        if not buf:
            return None if self.at_end() else b""
        return bytes(buf)

    # Non-consuming reads

    def peek_byte(self) -> Optional[bytes]:
        """The byte under the cursor without moving it. None at end-of-stream."""
        pos = self.tell()
        try:
            return self._handle.read(1) or None
        finally:
            self._handle.seek(pos)

    def peek_line(self, max_len: int = 0) -> Optional[bytes]:
        """Same as read_line, but the cursor is restored afterwards."""
        pos = self.tell()
        before_start = self._before_start
        try:
            return self.read_line(max_len)
        finally:
            self._handle.seek(pos)
            self._before_start = before_start

    def tell_end(self) -> int:
        """Offset one past the last byte. The cursor is not disturbed."""
        pos = self.tell()
        try:
            return self._handle.seek(0, io.SEEK_END)
        finally:
            self._handle.seek(pos)

    def at_end(self) -> bool:
        """True if no byte can be read at the cursor."""
        return self.tell() >= self.tell_end()


__all__ = [
    "ByteStream",
    "CR",
    "LF",
    "EOL_BYTES",
    "DEFAULT_READ_CHUNK",
    "find_first_eol",
    "find_last_eol",
]
