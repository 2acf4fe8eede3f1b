"""
LineNavigator: the navigation engine bound to one stream.

Every operation of the engine is available as a method, using the
navigator's own read_chunk and encoding unless overridden per call.

Example:
    >>> with LineNavigator.open("access.log") as nav:
    ...     nav.move_to_end()
    ...     nav.move_back(10)
    ...     print(nav.read_line())
"""
from __future__ import annotations

from typing import List, Optional

from Linewalk.core import boundaries, eol, records, stepper, unget
from Linewalk.core.eol import EolKind
from Linewalk.core.records import DEFAULT_DELIMITER
from Linewalk.core.result import Line
from Linewalk.core.stream import ByteStream


class LineNavigator(ByteStream):
    """Seekable stream with line navigation and record reading."""

    def _chunk(self, read_chunk: Optional[int]) -> int:
        return self.read_chunk if read_chunk is None else read_chunk

    # EOL

    def on_eol(self) -> bool:
        return eol.on_eol(self)

    def classify_eol(self) -> Optional[EolKind]:
        return eol.classify_eol(self)

    def move_before_eol(self) -> int:
        return eol.move_before_eol(self)

    def move_end_of_eol(self) -> Optional[int]:
        return eol.move_end_of_eol(self)

    def move_after_eol(self) -> Optional[int]:
        return eol.move_after_eol(self)

    # Boundaries and stepping

    def line_start(self, read_chunk: Optional[int] = None) -> int:
        return boundaries.line_start(self, self._chunk(read_chunk))

    def line_end(self, read_chunk: Optional[int] = None) -> int:
        return boundaries.line_end(self, self._chunk(read_chunk))

    def line_prev(self, read_chunk: Optional[int] = None) -> Optional[int]:
        return stepper.line_prev(self, self._chunk(read_chunk))

    def line_next(self, read_chunk: Optional[int] = None) -> Optional[int]:
        return stepper.line_next(self, self._chunk(read_chunk))

    def move_back(self, n: int = 1, read_chunk: Optional[int] = None) -> int:
        return stepper.move_back(self, n, self._chunk(read_chunk))

    def move_forward(self, n: int = 1, read_chunk: Optional[int] = None) -> int:
        return stepper.move_forward(self, n, self._chunk(read_chunk))

    def current_line(self) -> Line:
        """
        The line containing the cursor.

        The cursor is left at the start of that line.
        """
        start = self.line_start()
        content = self.read_line() or b""
        self.seek(start)
        return Line.from_bytes(start, content, self.encoding, self.errors)

    # Backward reads

    def unget_byte(self) -> Optional[bytes]:
        return unget.unget_byte(self)

    def unget_line(self, max_len: int = 0) -> Optional[bytes]:
        return unget.unget_line(self, max_len, self.read_chunk)

    # Records

    def read_record(
        self,
        max_len: int = 0,
        delimiter: str = DEFAULT_DELIMITER,
        expected_fields: Optional[int] = None,
    ) -> Optional[List[str]]:
        return records.read_record(self, max_len, delimiter, expected_fields)

    def read_record_reverse(
        self,
        max_len: int = 0,
        delimiter: str = DEFAULT_DELIMITER,
        expected_fields: Optional[int] = None,
    ) -> Optional[List[str]]:
        return records.read_record_reverse(
            self, max_len, delimiter, expected_fields, self.read_chunk
        )


__all__ = ["LineNavigator"]
