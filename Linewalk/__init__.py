"""
Linewalk - bidirectional, end-of-line aware navigation over seekable files.
"""
from __future__ import annotations

__version__ = "0.1.0"

from Linewalk.config import NavigatorConfig
from Linewalk.core import (
    ByteStream,
    EolKind,
    InvalidDelimiterError,
    Line,
    LineNavigator,
    LinewalkError,
    NavigationResult,
    UnsupportedOptionError,
)

__all__ = [
    "__version__",
    "ByteStream",
    "EolKind",
    "Line",
    "LineNavigator",
    "NavigationResult",
    "NavigatorConfig",
    "LinewalkError",
    "UnsupportedOptionError",
    "InvalidDelimiterError",
]
