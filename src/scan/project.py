"""Project-mode parsing: root lumps and their ``#include`` graph."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from parse.includes import extract_includes
from parse.scanner import scan_text
from scan.sources import read_source_file
from utils import normalize_path

if TYPE_CHECKING:
    from signatures.table import SignatureTable

logger = logging.getLogger(__name__)

ROOT_LUMP_STEM = "zscript"


@dataclass
class ProjectParseResult:
    """Outcome of one project-parse pass."""

    root: Path
    files: list[str] = field(default_factory=list)
    functions_found: int = 0
    missing_includes: list[tuple[str, str]] = field(default_factory=list)


def is_root_lump(name: str) -> bool:
    """Return True for ``zscript`` / ``zscript.<ext>`` file names (any case)."""
    lowered = name.lower()
    return lowered == ROOT_LUMP_STEM or lowered.startswith(f"{ROOT_LUMP_STEM}.")


def find_root_lumps(directory: Path) -> list[Path]:
    """Return the root lump files directly inside a directory, sorted by name."""
    try:
        names = sorted(os.listdir(directory))
    except OSError:
        return []
    return [
        directory / name
        for name in names
        if is_root_lump(name) and (directory / name).is_file()
    ]


def _match_case_insensitive(base: Path, relative: str) -> Path | None:
    """Resolve ``relative`` under ``base`` component by component, ignoring case."""
    current = base
    for part in (p for p in relative.split("/") if p and p != "."):
        if part == "..":
            current = current.parent
            continue
        candidate = current / part
        if candidate.exists():
            current = candidate
            continue
        try:
            names = os.listdir(current)
        except OSError:
            return None
        folded = part.casefold()
        matches = sorted(name for name in names if name.casefold() == folded)
        if not matches:
            return None
        current = current / matches[0]
    return current if current.is_file() else None


def resolve_include(include: str, *, project_root: Path, including_file: Path) -> Path | None:
    """Resolve an include path against the project root, then the including file.

    Lookups fall back to case-insensitive matching so mods authored on
    case-insensitive filesystems still resolve.
    """
    for base in (project_root, including_file.parent):
        resolved = _match_case_insensitive(base, include)
        if resolved is not None:
            return resolved
    return None


def parse_file_with_includes(
    path: Path,
    table: SignatureTable,
    *,
    project_root: Path,
    visited: set[str],
    result: ProjectParseResult,
) -> None:
    """Scan one file, then follow its includes depth-first.

    ``visited`` holds normalized paths already parsed in this pass; a file
    found there is skipped, which terminates self- and mutual includes.

    Raises:
        OSError: If a file that exists cannot be read.
    """
    key = normalize_path(path)
    if key in visited:
        logger.debug("Already parsed in this pass: %s", path)
        return
    visited.add(key)

    unit = read_source_file(path)
    result.functions_found += scan_text(unit.text, table, source=unit.identifier)
    result.files.append(unit.identifier)

    for include in extract_includes(unit.text):
        target = resolve_include(include, project_root=project_root, including_file=path)
        if target is None:
            logger.warning("Include %r from %s not found", include, path)
            result.missing_includes.append((str(path), include))
            continue
        parse_file_with_includes(
            target,
            table,
            project_root=project_root,
            visited=visited,
            result=result,
        )


def parse_project(
    root: Path,
    table: SignatureTable,
    *,
    visited: set[str] | None = None,
    clear: bool = True,
) -> ProjectParseResult:
    """Parse every root lump of a project directory and everything it includes.

    Args:
        root: Project directory containing ``zscript`` / ``zscript.*`` lumps
        table: Table receiving the signatures
        visited: Per-pass visited set; a fresh one is created when omitted
        clear: Clear the table before scanning

    Returns:
        ProjectParseResult listing parsed files, function count and includes
        that could not be resolved.
    """
    if visited is None:
        visited = set()

    result = ProjectParseResult(root=root)
    with table.lock:
        if clear:
            table.clear()
        for lump in find_root_lumps(root):
            parse_file_with_includes(
                lump,
                table,
                project_root=root,
                visited=visited,
                result=result,
            )

    logger.info(
        "Parsed %d functions from %d files under %s",
        result.functions_found,
        len(result.files),
        root,
    )
    return result


__all__ = [
    "ProjectParseResult",
    "find_root_lumps",
    "is_root_lump",
    "parse_file_with_includes",
    "parse_project",
    "resolve_include",
]
