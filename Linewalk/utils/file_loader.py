"""
File-level helpers built on LineNavigator:
- Detects binary files (the CLI refuses them unless forced)
- Finds the line containing a byte offset
- Walks lines lazily, forward or backward, from any offset
- Collects the last N lines without reading the whole file
- Iterates delimited records in either direction
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Iterator, List, Optional

from Linewalk.config import NavigatorConfig
from Linewalk.core.navigator import LineNavigator
from Linewalk.core.result import Line, NavigationResult


def looks_binary(sample: bytes) -> bool:
    """
    Heuristic check for binary files.
    Args:
        sample (bytes): A sample of the file content.

    Returns:
        bool: True if the file is binary, False otherwise.
    """
    if not sample:
        return False

    if b"\x00" in sample:
        return True

    nontext = 0
    for byte in sample:
        if byte in b"\t\n\r\f\b":
            continue

        if byte < 32 or byte > 126:
            nontext += 1

    return nontext / len(sample) > 0.3


def sniff_binary(path: str | Path, probe: int = 1024) -> bool:
    """Apply looks_binary to the first `probe` bytes of `path`."""
    with Path(path).open("rb") as f:
        return looks_binary(f.read(probe))


def open_navigator(
    path: str | Path,
    config: Optional[NavigatorConfig] = None,
) -> LineNavigator:
    cfg = config or NavigatorConfig()
    return LineNavigator.open(path, **cfg.stream_options())


def line_at(
    path: str | Path,
    offset: int,
    config: Optional[NavigatorConfig] = None,
) -> Line:
    """
    The line containing byte `offset` of `path`.

    Offsets at or past the end give the (empty) position after the last
    terminator, or the last line if the file does not end with one.
    """
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    with open_navigator(path, config) as nav:
        nav.seek(offset)
        return nav.current_line()


def iter_lines(
    path: str | Path,
    start: Optional[int] = None,
    reverse: bool = False,
    limit: Optional[int] = None,
    config: Optional[NavigatorConfig] = None,
) -> Iterator[Line]:
    """
    Lazily walk the lines of a file.

    Args:
        path: File to read
        start: Offset inside the first line to yield. Defaults to the
            start of the file, or its end when reverse is set
        reverse: Walk towards the start of the file
        limit: Stop after this many lines

    Yields:
        Line objects in visiting order
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    with open_navigator(path, config) as nav:
        if start is not None:
            nav.seek(start)
        elif reverse:
            nav.move_to_end()

        # Past the final terminator there is no line to yield
        if reverse and nav.line_start() == nav.tell_end():
            if nav.line_prev() is None:
                return

        count = 0
        while limit is None or count < limit:
            line = nav.current_line()
            if not line.content:
                break
            yield line
            count += 1
            step = nav.line_prev() if reverse else nav.line_next()
            if step is None:
                break


def tail_lines(
    path: str | Path,
    count: int,
    config: Optional[NavigatorConfig] = None,
) -> List[Line]:
    """The last `count` lines of `path`, in file order."""
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if count == 0:
        return []
    lines = list(iter_lines(path, reverse=True, limit=count, config=config))
    lines.reverse()
    return lines


def iter_records(
    path: str | Path,
    reverse: bool = False,
    expected_fields: Optional[int] = None,
    limit: Optional[int] = None,
    config: Optional[NavigatorConfig] = None,
) -> Iterator[List[str]]:
    """
    Lazily read delimited records from the start (or end) of a file.

    Uses the delimiter and max_len of `config`.
    """
    cfg = config or NavigatorConfig()
    with open_navigator(path, cfg) as nav:
        if reverse:
            nav.move_to_end()
        count = 0
        while limit is None or count < limit:
            if reverse:
                record = nav.read_record_reverse(cfg.max_len, cfg.delimiter, expected_fields)
            else:
                record = nav.read_record(cfg.max_len, cfg.delimiter, expected_fields)
            if record is None:
                break
            yield record
            count += 1


def walk_file(
    path: str | Path,
    start: Optional[int] = None,
    reverse: bool = False,
    limit: Optional[int] = None,
    config: Optional[NavigatorConfig] = None,
) -> NavigationResult:
    """
    Collect lines with iter_lines into a NavigationResult.

    I/O errors are recorded on the result instead of being raised.
    """
    start_time = time.time()
    file_path = Path(path)

    if not file_path.is_file():
        return NavigationResult(path=str(path), errors=[f"File not found: {path}"])

    lines: List[Line] = []
    errors: List[str] = []
    try:
        for line in iter_lines(file_path, start, reverse, limit, config):
            lines.append(line)
    except OSError as e:
        errors.append(f"Error reading {path}: {e}")

    duration = (time.time() - start_time) * 1000
    return NavigationResult(
        lines=lines,
        path=str(path),
        duration_ms=duration,
        errors=errors,
    )


__all__ = [
    "looks_binary",
    "sniff_binary",
    "open_navigator",
    "line_at",
    "iter_lines",
    "tail_lines",
    "iter_records",
    "walk_file",
]
