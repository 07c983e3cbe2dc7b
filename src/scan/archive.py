"""Archive (pk3/zip) access for built-in script sources."""

from __future__ import annotations

import logging
import zipfile
import zlib
from contextlib import contextmanager
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from scan.sources import SourceUnit
from utils import is_script_entry

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Iterable, Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)


class ArchiveError(Exception):
    """Raised when an archive or one of its entries cannot be read."""


@dataclass(frozen=True)
class ArchiveEntry:
    """One entry of an opened archive."""

    name: str
    is_directory: bool
    read_text: Callable[[], str]


def _read_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> str:
    try:
        return archive.read(info).decode("utf-8", errors="replace")
    except (
        OSError,
        EOFError,
        RuntimeError,
        NotImplementedError,
        zipfile.BadZipFile,
        zlib.error,
    ) as exc:
        msg = f"Cannot read archive entry {info.filename}: {exc}"
        raise ArchiveError(msg) from exc


@contextmanager
def open_archive(path: Path) -> Generator[list[ArchiveEntry], None, None]:
    """Open an archive and yield its entries in archive order.

    Raises:
        ArchiveError: If the archive is missing or not a valid zip file.
    """
    try:
        archive = zipfile.ZipFile(path)
    except (OSError, zipfile.BadZipFile) as exc:
        msg = f"Cannot open archive {path}: {exc}"
        raise ArchiveError(msg) from exc

    with archive:
        entries = [
            ArchiveEntry(
                name=info.filename,
                is_directory=info.is_dir(),
                read_text=partial(_read_entry, archive, info),
            )
            for info in archive.infolist()
        ]
        logger.debug("Found %d entries in %s", len(entries), path)
        yield entries


def iter_script_units(
    entries: Iterable[ArchiveEntry],
    *,
    script_dir: str = "zscript",
    skip_extensions: list[str] | tuple[str, ...] = (".txt",),
) -> Iterator[SourceUnit]:
    """Yield a SourceUnit for every script entry, reading each lazily."""
    for entry in entries:
        if entry.is_directory:
            continue
        if not is_script_entry(
            entry.name,
            script_dir=script_dir,
            skip_extensions=skip_extensions,
        ):
            logger.debug("Skipped non-script entry: %s", entry.name)
            continue
        yield SourceUnit(identifier=entry.name, text=entry.read_text())


__all__ = ["ArchiveEntry", "ArchiveError", "iter_script_units", "open_archive"]
