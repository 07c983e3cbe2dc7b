"""Shared utilities for path and entry-name handling."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath


def normalize_path(file_path: str | Path) -> str:
    """Return the visited-set key for a filesystem path.

    The path is made absolute and resolved, then case-normalised on
    case-insensitive platforms so one file never gets two keys.
    """
    resolved = Path(file_path).expanduser().resolve()
    return os.path.normcase(str(resolved))


def is_script_entry(
    entry_name: str,
    *,
    script_dir: str = "zscript",
    skip_extensions: list[str] | tuple[str, ...] = (".txt",),
) -> bool:
    """Check whether an archive entry is a script source under script_dir.

    Matching is case-insensitive. Entries with a skipped extension (plain
    text lumps such as ``zscript/readme.txt``) are rejected.

    Examples:
        >>> is_script_entry("ZScript/Actors/Actor.zs")
        True
        >>> is_script_entry("zscript/notes.txt")
        False
        >>> is_script_entry("sprites/zscript.zs")
        False
    """
    name = entry_name.replace("\\", "/").lower()
    if not name.startswith(f"{script_dir.lower()}/"):
        return False
    suffix = PurePosixPath(name).suffix
    return suffix not in {ext.lower() for ext in skip_extensions}
