"""Tests for the CLI module."""
from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from Linewalk import __version__
from Linewalk.cli import app

runner = CliRunner()

MIXED = b"x\r\ny\rz\n"
FOUR_LINES = b"l1\nl2\nl3\nl4\n"


def _write(tmp_path: Path, data: bytes, name: str = "data.txt") -> Path:
    file_path = tmp_path / name
    file_path.write_bytes(data)
    return file_path


def test_cli_version() -> None:
    """Test the version command."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_tail_json(tmp_path: Path) -> None:
    """Test tail with JSON output."""
    file_path = _write(tmp_path, FOUR_LINES)

    result = runner.invoke(app, ["tail", str(file_path), "-n", "2", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [line["text"] for line in data["lines"]] == ["l3", "l4"]
    assert data["summary"]["total_lines"] == 2


def test_cli_tail_table(tmp_path: Path) -> None:
    """Test tail with table output."""
    file_path = _write(tmp_path, FOUR_LINES)

    result = runner.invoke(app, ["tail", str(file_path), "--lines", "1"])

    assert result.exit_code == 0
    assert "l4" in result.output
    assert "l3" not in result.output


def test_cli_tail_empty_file(tmp_path: Path) -> None:
    """Test tail on an empty file."""
    file_path = _write(tmp_path, b"")

    result = runner.invoke(app, ["tail", str(file_path)])

    assert result.exit_code == 0
    assert "No lines" in result.output


def test_cli_nonexistent_path() -> None:
    """Test CLI with nonexistent path."""
    result = runner.invoke(app, ["tail", "/nonexistent/path/file.txt"])

    # Exit code 2 = error
    assert result.exit_code == 2
    assert "not found" in result.output.lower()


def test_cli_refuses_binary_file(tmp_path: Path) -> None:
    """Test that binary files need --force."""
    file_path = _write(tmp_path, b"\x00\x01\x02abc\n", "blob.bin")

    refused = runner.invoke(app, ["tail", str(file_path)])
    forced = runner.invoke(app, ["tail", str(file_path), "--force", "--json"])

    assert refused.exit_code == 2
    assert "binary" in refused.output.lower()
    assert forced.exit_code == 0
    assert len(json.loads(forced.stdout)["lines"]) == 1


def test_cli_line_at_offset(tmp_path: Path) -> None:
    """Test the line command with an offset."""
    file_path = _write(tmp_path, MIXED)

    result = runner.invoke(app, ["line", str(file_path), "--offset", "4", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["lines"] == [{"start": 3, "end": 5, "text": "y", "eol": "cr"}]


def test_cli_line_negative_offset(tmp_path: Path) -> None:
    """Test that a negative offset is an error."""
    file_path = _write(tmp_path, MIXED)

    result = runner.invoke(app, ["line", str(file_path), "--offset", "-1"])

    assert result.exit_code == 2


def test_cli_lines_reverse(tmp_path: Path) -> None:
    """Test walking lines backward."""
    file_path = _write(tmp_path, MIXED)

    result = runner.invoke(app, ["lines", str(file_path), "--reverse", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [line["text"] for line in data["lines"]] == ["z", "y", "x"]
    assert [line["eol"] for line in data["lines"]] == ["lf", "cr", "crlf"]


def test_cli_lines_start_and_limit(tmp_path: Path) -> None:
    """Test walking forward from an offset with a limit."""
    file_path = _write(tmp_path, FOUR_LINES)

    result = runner.invoke(
        app, ["lines", str(file_path), "--start", "4", "--limit", "2", "--json"]
    )

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [line["text"] for line in data["lines"]] == ["l2", "l3"]


def test_cli_records_expected_fields(tmp_path: Path) -> None:
    """Test records spanning lines."""
    file_path = _write(tmp_path, b"a,b\nc,d\n", "data.csv")

    result = runner.invoke(app, ["records", str(file_path), "--fields", "3", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["records"] == [["a", "b\nc", "d"]]


def test_cli_records_reverse_limit(tmp_path: Path) -> None:
    """Test reading the last records."""
    file_path = _write(tmp_path, b"a,1\nb,2\nc,3\n", "data.csv")

    result = runner.invoke(
        app, ["records", str(file_path), "--reverse", "--limit", "2", "--json"]
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["records"] == [["c", "3"], ["b", "2"]]


def test_cli_records_unsupported_combination(tmp_path: Path) -> None:
    """Test that reverse reading rejects --fields with --max-len."""
    file_path = _write(tmp_path, b"a,b\nc,d\n", "data.csv")

    result = runner.invoke(
        app,
        ["records", str(file_path), "--reverse", "--fields", "3", "--max-len", "10"],
    )

    assert result.exit_code == 2
    assert "max_len" in result.output


def test_cli_records_bad_delimiter(tmp_path: Path) -> None:
    """Test that multi-byte delimiters are rejected."""
    file_path = _write(tmp_path, b"a::b\n", "data.txt")

    result = runner.invoke(app, ["records", str(file_path), "--delimiter", "::"])

    assert result.exit_code == 2


def test_cli_records_table(tmp_path: Path) -> None:
    """Test the records table output."""
    file_path = _write(tmp_path, b"a,b\nc\n", "data.csv")

    result = runner.invoke(app, ["records", str(file_path)])

    assert result.exit_code == 0
    assert "Field 1" in result.output
    assert "Field 2" in result.output


def test_cli_config_file(tmp_path: Path) -> None:
    """Test that --config supplies the delimiter."""
    config_path = tmp_path / "linewalk.json"
    config_path.write_text(json.dumps({"delimiter": ";"}), encoding="utf-8")
    file_path = _write(tmp_path, b"a;b\n", "data.csv")

    result = runner.invoke(
        app, ["--config", str(config_path), "records", str(file_path), "--json"]
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["records"] == [["a", "b"]]


def test_cli_invalid_config_file(tmp_path: Path) -> None:
    """Test that an invalid config file is an error."""
    config_path = tmp_path / "linewalk.json"
    config_path.write_text(json.dumps({"read_chunk": 0}), encoding="utf-8")
    file_path = _write(tmp_path, FOUR_LINES)

    result = runner.invoke(app, ["--config", str(config_path), "tail", str(file_path)])

    assert result.exit_code == 2


def test_cli_verbose(tmp_path: Path) -> None:
    """Test that --verbose does not change the output."""
    file_path = _write(tmp_path, FOUR_LINES)

    result = runner.invoke(app, ["-v", "tail", str(file_path), "-n", "1", "--json"])

    assert result.exit_code == 0


def test_cli_records_max_len_one(tmp_path: Path) -> None:
    """Test that a cap leaving no room for a byte is rejected."""
    file_path = _write(tmp_path, b"a,b\n", "data.csv")

    result = runner.invoke(app, ["records", str(file_path), "--max-len", "1"])

    assert result.exit_code == 2
