"""Source units handed to the scanner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class SourceUnit:
    """A named block of ZScript text (a file or an archive entry)."""

    identifier: str
    text: str

    def head(self, count: int = 20) -> list[str]:
        """Return the first ``count`` lines, trimmed."""
        return [line.strip() for line in self.text.split("\n")[:count]]


def read_source_file(path: Path) -> SourceUnit:
    """Read a script file from disk.

    Raises:
        OSError: If the file cannot be read.
    """
    text = path.read_text(encoding="utf-8", errors="replace")
    return SourceUnit(identifier=str(path), text=text)


__all__ = ["SourceUnit", "read_source_file"]
