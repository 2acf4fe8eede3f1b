"""
Delimited-record reader.

Splits lines into fields on a single delimiter byte. There is no quoting
or escaping: a delimiter always splits. When a record is known to have a
given number of fields and a line yields fewer, the record is assumed to
continue on the adjacent line, with the line break kept inside the field
that spans both lines.

Fields are split as bytes and decoded with the stream's encoding last.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from Linewalk.core.errors import InvalidDelimiterError, UnsupportedOptionError
from Linewalk.core.stream import DEFAULT_READ_CHUNK, ByteStream
from Linewalk.core.unget import unget_line

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","

_EOL_CHARS = b"\r\n"


def delimiter_byte(delimiter: str, encoding: str = "utf-8") -> bytes:
    """
    Encode `delimiter`, which must come out as exactly one byte.

    Raises:
        InvalidDelimiterError: For empty, multi-character or multi-byte delimiters
    """
    try:
        encoded = delimiter.encode(encoding)
    except UnicodeEncodeError:
        raise InvalidDelimiterError(delimiter, encoding) from None
    if len(encoded) != 1:
        raise InvalidDelimiterError(delimiter, encoding)
    return encoded


def split_fields(data: bytes, delimiter: bytes) -> List[bytes]:
    """
    Split raw line bytes on `delimiter`.

    Examples:
        >>> split_fields(b'a,"b,c"\\n', b",")
        [b'a', b'"b', b'c"\\n']
    """
    return data.split(delimiter)


def _finish(fields: List[bytes], stream: ByteStream) -> List[str]:
    fields[-1] = fields[-1].rstrip(_EOL_CHARS)
    return [f.decode(stream.encoding, stream.errors) for f in fields]


def read_record(
    stream: ByteStream,
    max_len: int = 0,
    delimiter: str = DEFAULT_DELIMITER,
    expected_fields: Optional[int] = None,
) -> Optional[List[str]]:
    """
    Read one record forward from the cursor.

    Args:
        stream: Stream to read
        max_len: Per-line read cap as in ByteStream.read_line (0 = none)
        delimiter: Single-byte field separator
        expected_fields: Keep joining following lines while the record has
            fewer fields than this

    Returns:
        The fields, or None at end-of-stream or when max_len leaves
        no room for a byte (max_len=1)

    Example:
        >>> stream = ByteStream.from_bytes(b"a,b\\nc,d\\n")
        >>> read_record(stream, expected_fields=3)
        ['a', 'b\\nc', 'd']
    """
    sep = delimiter_byte(delimiter, stream.encoding)
    line = stream.read_line(max_len)
    if not line:
        return None

    fields = split_fields(line, sep)
    while expected_fields and len(fields) < expected_fields:
        following = stream.read_line(max_len)
        if not following:
            break
        logger.debug(
            "read_record: %d of %d fields, continuing at %d",
            len(fields), expected_fields, stream.tell() - len(following),
        )
        more = split_fields(following, sep)
        fields[-1] += more[0]
        fields.extend(more[1:])

    return _finish(fields, stream)


def read_record_reverse(
    stream: ByteStream,
    max_len: int = 0,
    delimiter: str = DEFAULT_DELIMITER,
    expected_fields: Optional[int] = None,
    read_chunk: int = DEFAULT_READ_CHUNK,
) -> Optional[List[str]]:
    """
    Read one record backward, ending at the cursor.

    Lines are taken with unget_line. When continuing, the earlier line's
    last field is joined in front of the current first field.

    Raises:
        UnsupportedOptionError: If both `expected_fields` and `max_len` are set

    Returns:
        The fields in stream order, or None once the start has been passed
        or when max_len=1
    """
    if expected_fields and max_len:
        raise UnsupportedOptionError(
            "expected_fields cannot be combined with max_len when reading backward",
            options=("expected_fields", "max_len"),
        )
    sep = delimiter_byte(delimiter, stream.encoding)
    line = unget_line(stream, max_len, read_chunk)
    if not line:
        return None

    fields = split_fields(line, sep)
    while expected_fields and len(fields) < expected_fields:
        preceding = unget_line(stream, 0, read_chunk)
        if preceding is None:
            break
        logger.debug(
            "read_record_reverse: %d of %d fields, continuing backward",
            len(fields), expected_fields,
        )
        earlier = split_fields(preceding, sep)
        fields = earlier[:-1] + [earlier[-1] + fields[0]] + fields[1:]

    return _finish(fields, stream)


__all__ = [
    "DEFAULT_DELIMITER",
    "delimiter_byte",
    "split_fields",
    "read_record",
    "read_record_reverse",
]
