"""Workspace scanning for ZScript project roots."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from scan.project import is_root_lump

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


def _should_include_file(
    path: Path,
    directory: Path,
    gitignore_matches: Callable[[str], bool] | None,
) -> bool:
    """Check if a root lump should be included based on all filtering rules."""
    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, directory):
        return False

    if not is_root_lump(path.name):
        return False

    return not (gitignore_matches is not None and gitignore_matches(str(path)))


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted list of .gitignore files under root (including root)."""
    gitignore_paths = [root / ".gitignore"]
    gitignore_paths.extend(root.rglob(".gitignore"))
    unique_paths = {path for path in gitignore_paths if path.is_file()}
    return sorted(unique_paths, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def find_project_roots(
    directory: Path,
    *,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find every ZScript project root under a workspace directory.

    A project root is a directory holding a ``zscript`` / ``zscript.*`` lump.
    Ignored paths (.gitignore) and symlinks are skipped.

    Args:
        directory: Workspace directory to search
        nested_gitignore: Also honour .gitignore files below the root

    Yields:
        Project root directories, sorted lexicographically by relative path
        for deterministic ordering.
    """
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    roots = {
        path.parent
        for path in directory.rglob("*")
        if _should_include_file(path, directory, gitignore_matches)
    }

    yield from sorted(roots, key=lambda p: p.relative_to(directory).as_posix())


__all__ = ["_should_include_file", "find_project_roots"]
