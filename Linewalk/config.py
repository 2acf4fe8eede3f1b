from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict

from Linewalk.core.records import DEFAULT_DELIMITER, delimiter_byte
from Linewalk.core.stream import DEFAULT_READ_CHUNK


@dataclass
class NavigatorConfig:
    """
    Settings shared by the file helpers and the CLI.

    Attributes:
        read_chunk: Window size for boundary scans and line reads
        max_len: Per-line read cap for records (0 = unbounded, else >= 2)
        delimiter: Record field separator
        encoding: Encoding used to decode lines and fields
        errors: Decoding error handler
    """
    read_chunk: int = DEFAULT_READ_CHUNK
    max_len: int = 0
    delimiter: str = DEFAULT_DELIMITER
    encoding: str = "utf-8"
    errors: str = "replace"

    def validate(self) -> "NavigatorConfig":
        if self.read_chunk < 1:
            raise ValueError(f"read_chunk must be >= 1, got {self.read_chunk}")
        if self.max_len < 0 or self.max_len == 1:
            # 1 leaves no room for a byte: max_len - 1 bytes are read
            raise ValueError(f"max_len must be 0 or >= 2, got {self.max_len}")
        delimiter_byte(self.delimiter, self.encoding)
        return self

    def stream_options(self) -> Dict[str, Any]:
        """Keyword arguments for ByteStream/LineNavigator constructors."""
        return {
            "read_chunk": self.read_chunk,
            "encoding": self.encoding,
            "errors": self.errors,
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_json_file(path: str | Path) -> "NavigatorConfig":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a JSON object: {path}")
        return NavigatorConfig(**data).validate()


__all__ = ["NavigatorConfig"]
