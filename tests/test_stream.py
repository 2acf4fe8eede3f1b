"""Tests for the ByteStream position primitives."""
from __future__ import annotations

import gc
import io
import warnings
from pathlib import Path
from typing import Any, BinaryIO, List

import pytest

from Linewalk.core import stream as stream_module
from Linewalk.core.stream import ByteStream, find_first_eol, find_last_eol


class _Unseekable(io.BytesIO):
    def seekable(self) -> bool:
        return False


def test_peek_byte_does_not_move_cursor() -> None:
    """Test that peek_byte leaves the cursor where it was."""
    stream = ByteStream.from_bytes(b"ab")

    assert stream.peek_byte() == b"a"
    assert stream.tell() == 0


def test_peek_byte_at_end_returns_none() -> None:
    """Test that peek_byte signals end-of-stream with None."""
    stream = ByteStream.from_bytes(b"ab")
    stream.move_to_end()

    assert stream.peek_byte() is None
    assert stream.tell() == 2


def test_peek_line_restores_cursor() -> None:
    """Test that peek_line returns the rest of the line without consuming it."""
    stream = ByteStream.from_bytes(b"one\ntwo\n")
    stream.seek(1)

    assert stream.peek_line() == b"ne\n"
    assert stream.tell() == 1


def test_peek_line_max_len() -> None:
    """Test that peek_line stops after max_len - 1 bytes."""
    stream = ByteStream.from_bytes(b"abcdef")

    assert stream.peek_line(4) == b"abc"
    assert stream.tell() == 0


def test_read_line_all_conventions() -> None:
    """Test that read_line stops at CRLF, CR and LF."""
    stream = ByteStream.from_bytes(b"x\r\ny\rz\n")

    assert stream.read_line() == b"x\r\n"
    assert stream.read_line() == b"y\r"
    assert stream.read_line() == b"z\n"
    assert stream.read_line() is None


def test_read_line_crlf_across_chunks() -> None:
    """Test that a CRLF split between two reads is kept together."""
    stream = ByteStream.from_bytes(b"a\r\nb", read_chunk=2)

    assert stream.read_line() == b"a\r\n"
    assert stream.read_line() == b"b"


def test_read_line_max_len_cuts_crlf() -> None:
    """Test that the length cap wins over the second half of a CRLF."""
    stream = ByteStream.from_bytes(b"ab\r\n")

    assert stream.read_line(4) == b"ab\r"
    assert stream.tell() == 3


def test_read_line_max_len_one() -> None:
    """Test that max_len=1 reads nothing but still reports end-of-stream."""
    stream = ByteStream.from_bytes(b"a")

    assert stream.read_line(1) == b""
    stream.move_to_end()
    assert stream.read_line(1) is None


def test_read_line_negative_max_len() -> None:
    """Test that a negative max_len is rejected."""
    stream = ByteStream.from_bytes(b"a")

    with pytest.raises(ValueError):
        stream.read_line(-1)


def test_at_end_is_rederived() -> None:
    """Test that at_end follows the cursor instead of a stored flag."""
    stream = ByteStream.from_bytes(b"abc")

    assert not stream.at_end()
    stream.read()
    assert stream.at_end()
    stream.seek(1)
    assert not stream.at_end()
    stream.seek(10)
    assert stream.at_end()


def test_tell_end_keeps_cursor() -> None:
    """Test that tell_end does not disturb the cursor."""
    stream = ByteStream.from_bytes(b"hello")
    stream.seek(2)

    assert stream.tell_end() == 5
    assert stream.tell() == 2


def test_move_to_start_and_end() -> None:
    """Test absolute moves to both ends."""
    stream = ByteStream.from_bytes(b"hello")

    assert stream.move_to_end()
    assert stream.tell() == 5
    assert stream.move_to_start()
    assert stream.tell() == 0


def test_step_back_at_start_is_noop() -> None:
    """Test that stepping back from offset 0 does not move."""
    stream = ByteStream.from_bytes(b"ab")

    assert not stream.step_back()
    assert stream.tell() == 0
    stream.seek(2)
    assert stream.step_back()
    assert stream.tell() == 1


def test_before_start_cleared_by_seek() -> None:
    """Test that any cursor move leaves the before-start state."""
    stream = ByteStream.from_bytes(b"ab")
    stream.mark_before_start()

    assert stream.before_start
    assert stream.tell() == 0
    stream.seek(0)
    assert not stream.before_start


def test_rejects_unseekable_handle() -> None:
    """Test that non-seekable streams are refused."""
    with pytest.raises(ValueError):
        ByteStream(_Unseekable(b"data"))


def test_rejects_bad_read_chunk() -> None:
    """Test that read_chunk must be positive."""
    with pytest.raises(ValueError):
        ByteStream.from_bytes(b"data", read_chunk=0)


def test_open_requires_binary_mode(tmp_path: Path) -> None:
    """Test that text modes are refused."""
    file_path = tmp_path / "a.txt"
    file_path.write_bytes(b"a\n")

    with pytest.raises(ValueError):
        ByteStream.open(file_path, "r")


def test_open_and_close(tmp_path: Path) -> None:
    """Test that an opened stream owns and closes its handle."""
    file_path = tmp_path / "a.txt"
    file_path.write_bytes(b"line one\nline two\n")

    with ByteStream.open(file_path) as stream:
        assert stream.read_line() == b"line one\n"
        assert stream.name == str(file_path)

    assert stream.closed


def test_borrowed_handle_stays_open() -> None:
    """Test that a caller's handle is not closed by the context manager."""
    handle = io.BytesIO(b"abc")

    with ByteStream(handle) as stream:
        stream.read_byte()

    assert not handle.closed


def test_find_eol_helpers() -> None:
    """Test the first/last terminator helpers."""
    assert find_first_eol(b"ab\ncd\r") == 2
    assert find_first_eol(b"ab\rcd\n") == 2
    assert find_first_eol(b"abc") == -1
    assert find_last_eol(b"a\r\nb") == 2
    assert find_last_eol(b"a\rb") == 1
    assert find_last_eol(b"") == -1


def test_open_closes_handle_on_bad_options(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a failed constructor does not leak the opened file."""
    file_path = tmp_path / "a.txt"
    file_path.write_bytes(b"a\n")
    opened: List[BinaryIO] = []

    def tracking_open(path: Any, mode: str) -> BinaryIO:
        handle = open(path, mode)
        opened.append(handle)
        return handle

    monkeypatch.setattr(stream_module, "open", tracking_open, raising=False)

    with pytest.raises(ValueError):
        ByteStream.open(file_path, read_chunk=0)

    assert len(opened) == 1
    assert opened[0].closed


def test_open_bad_options_no_resource_warning(tmp_path: Path) -> None:
    """Test that no unclosed-file warning follows a failed open."""
    file_path = tmp_path / "a.txt"
    file_path.write_bytes(b"a\n")

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            ByteStream.open(file_path, read_chunk=0)
        except ValueError:
            pass
        gc.collect()

    assert not [w for w in caught if issubclass(w.category, ResourceWarning)]
