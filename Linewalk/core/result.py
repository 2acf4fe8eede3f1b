from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from Linewalk.core.eol import EolKind


@dataclass
class Line:
    """
    A single line located in a stream.

    Attributes:
        start: Offset of the first byte
        content: Raw bytes, terminator included
        text: Decoded content without its terminator
        eol: Terminator kind (None for a final line without one)
    """
    start: int
    content: bytes
    text: str
    eol: Optional[EolKind] = None

    @classmethod
    def from_bytes(
        cls,
        start: int,
        content: bytes,
        encoding: str = "utf-8",
        errors: str = "replace",
    ) -> "Line":
        eol = EolKind.of(content)
        body = content[: len(content) - len(eol.sequence)] if eol else content
        return cls(
            start=start,
            content=content,
            text=body.decode(encoding, errors),
            eol=eol,
        )

    @property
    def end(self) -> int:
        """Offset one past the last byte of the line."""
        return self.start + len(self.content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "text": self.text,
            "eol": self.eol.value if self.eol else None,
        }

    def __str__(self) -> str:
        return self.text


@dataclass
class NavigationResult:
    """
    Lines collected by a navigation run over one file.

    Attributes:
        lines: Lines in the order they were visited
        path: File the lines came from
        duration_ms: Wall time of the run in milliseconds
        errors: Problems encountered (the run may be partial)
    """
    lines: List[Line] = field(default_factory=list)
    path: Optional[str] = None
    duration_ms: float = 0.0
    errors: List[str] = field(default_factory=list)

    @property
    def found_lines(self) -> bool:
        return len(self.lines) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "lines": [line.to_dict() for line in self.lines],
            "duration_ms": self.duration_ms,
            "errors": self.errors,
            "summary": {
                "total_lines": len(self.lines),
                "bytes": sum(len(line.content) for line in self.lines),
            },
        }

    def __str__(self) -> str:
        return (
            f"{len(self.lines)} lines from {self.path or 'stream'} "
            f"[{self.duration_ms:.2f}ms]"
        )


__all__ = ["Line", "NavigationResult"]
