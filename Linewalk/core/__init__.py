"""
Linewalk core package.

End-of-line aware navigation over seekable byte streams, and a
delimited-record reader built on it.
"""
from __future__ import annotations

from Linewalk.core.boundaries import line_end, line_start
from Linewalk.core.eol import (
    EolKind,
    classify_eol,
    move_after_eol,
    move_before_eol,
    move_end_of_eol,
    on_eol,
)
from Linewalk.core.errors import InvalidDelimiterError, LinewalkError, UnsupportedOptionError
from Linewalk.core.navigator import LineNavigator
from Linewalk.core.records import read_record, read_record_reverse, split_fields
from Linewalk.core.result import Line, NavigationResult
from Linewalk.core.stepper import line_next, line_prev, move_back, move_forward
from Linewalk.core.stream import DEFAULT_READ_CHUNK, ByteStream
from Linewalk.core.unget import unget_byte, unget_line

__all__ = [
    "ByteStream",
    "LineNavigator",
    "DEFAULT_READ_CHUNK",
    "EolKind",
    "on_eol",
    "classify_eol",
    "move_before_eol",
    "move_end_of_eol",
    "move_after_eol",
    "line_start",
    "line_end",
    "line_prev",
    "line_next",
    "move_back",
    "move_forward",
    "unget_byte",
    "unget_line",
    "read_record",
    "read_record_reverse",
    "split_fields",
    "Line",
    "NavigationResult",
    "LinewalkError",
    "UnsupportedOptionError",
    "InvalidDelimiterError",
]
