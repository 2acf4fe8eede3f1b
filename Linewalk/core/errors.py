from __future__ import annotations


class LinewalkError(Exception):
    """Base class for errors raised by Linewalk."""


class UnsupportedOptionError(LinewalkError, ValueError):
    """
    Raised when a combination of options cannot be honoured.

    Detected before any I/O so that no partial result is produced.
    """

    def __init__(self, message: str, options: tuple[str, ...] = ()) -> None:
        self.options = options
        super().__init__(message)


class InvalidDelimiterError(LinewalkError, ValueError):
    """Raised when a record delimiter is not exactly one byte."""

    def __init__(self, delimiter: str, encoding: str) -> None:
        self.delimiter = delimiter
        self.encoding = encoding
        super().__init__(
            f"Delimiter must encode to exactly one byte in {encoding}: {delimiter!r}"
        )


__all__ = ["LinewalkError", "UnsupportedOptionError", "InvalidDelimiterError"]
