"""Editing-session state: the signature table and the scans that fill it.

Every entry point here is a boundary: failures are logged and returned as
notices, never raised to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from parse.scanner import scan_text
from query.providers import provide_completions, provide_signature_help
from rules.config import ZScriptConfig
from scan.archive import ArchiveError, iter_script_units, open_archive
from scan.project import find_root_lumps, parse_project
from scan.sources import read_source_file
from signatures.table import SignatureTable
from utils import normalize_path

if TYPE_CHECKING:
    from query.providers import DocumentView
    from signatures.models import CompletionItem, FunctionSignature, SignatureHelp

logger = logging.getLogger(__name__)

NoticeLevel = Literal["info", "warning", "error"]

PREVIEW_LINE_COUNT = 20
MISSING_PK3_MESSAGE = 'Set the "gzdoom_pk3_path" setting first.'


@dataclass(frozen=True)
class Notice:
    """A user-visible message produced by a session operation."""

    level: NoticeLevel
    message: str


@dataclass(frozen=True)
class FileListing:
    """An archive script entry and its first lines."""

    name: str
    lines: tuple[str, ...]


@dataclass
class ScanReport:
    notices: list[Notice] = field(default_factory=list)
    functions_found: int = 0
    files_processed: int = 0
    listings: list[FileListing] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(notice.level == "error" for notice in self.notices)

    def info(self, message: str) -> None:
        self.notices.append(Notice(level="info", message=message))

    def warning(self, message: str) -> None:
        self.notices.append(Notice(level="warning", message=message))

    def error(self, message: str) -> None:
        self.notices.append(Notice(level="error", message=message))


class SignatureSession:
    """Owns the signature table and the set of project roots already parsed.

    Scans are serialized on the table's lock, so two documents opened at the
    same time cannot interleave their writes.
    """

    def __init__(
        self,
        config: ZScriptConfig | None = None,
        table: SignatureTable | None = None,
    ) -> None:
        self.config = config or ZScriptConfig()
        self.table = table or SignatureTable()
        self.parsed_roots: set[str] = set()

    def _missing_archive(self, report: ScanReport) -> ScanReport:
        logger.error("No archive path set")
        report.error(MISSING_PK3_MESSAGE)
        return report

    def parse_archive(self, pk3_path: str | Path | None = None) -> ScanReport:
        """Clear the table and scan every script entry of the archive."""
        report = ScanReport()
        archive_path = self.config.archive_path(pk3_path)
        if archive_path is None:
            return self._missing_archive(report)

        logger.info("Parsing archive %s", archive_path)
        try:
            with self.table.lock, open_archive(archive_path) as entries:
                self.table.clear()
                for unit in iter_script_units(
                    entries,
                    script_dir=self.config.script_dir,
                    skip_extensions=self.config.skip_extensions,
                ):
                    logger.debug("Processing script entry: %s", unit.identifier)
                    report.functions_found += scan_text(
                        unit.text, self.table, source=unit.identifier
                    )
                    report.files_processed += 1
        except ArchiveError as exc:
            logger.error("Error parsing %s: %s", archive_path, exc, exc_info=True)
            report.error(f"Error parsing {archive_path.name}: {exc}")
            return report

        logger.info(
            "Processed %d script files with %d functions (%d signatures in table)",
            report.files_processed,
            report.functions_found,
            len(self.table),
        )
        report.info(
            f"Parsed {report.functions_found} built-in functions from {archive_path.name}"
        )
        return report

    def list_script_files(
        self,
        pk3_path: str | Path | None = None,
        *,
        preview_lines: int = PREVIEW_LINE_COUNT,
    ) -> ScanReport:
        """List the archive's script entries with their first lines."""
        report = ScanReport()
        archive_path = self.config.archive_path(pk3_path)
        if archive_path is None:
            return self._missing_archive(report)

        try:
            with open_archive(archive_path) as entries:
                for unit in iter_script_units(
                    entries,
                    script_dir=self.config.script_dir,
                    skip_extensions=self.config.skip_extensions,
                ):
                    report.listings.append(
                        FileListing(
                            name=unit.identifier,
                            lines=tuple(unit.head(preview_lines)),
                        )
                    )
                    report.files_processed += 1
        except ArchiveError as exc:
            logger.error("Error listing files in %s: %s", archive_path, exc, exc_info=True)
            report.error(f"Error listing files in {archive_path.name}: {exc}")
        return report

    def parse_file(self, path: str | Path, *, clear: bool = True) -> ScanReport:
        """Scan a single file, clearing the table first unless told not to."""
        report = ScanReport()
        file_path = Path(path).expanduser()
        if not file_path.is_file():
            logger.error("File not found: %s", file_path)
            report.error(f"File not found: {file_path}")
            return report

        try:
            unit = read_source_file(file_path)
        except OSError as exc:
            logger.error("Error reading %s: %s", file_path, exc, exc_info=True)
            report.error(f"Error parsing {file_path.name}: {exc}")
            return report

        with self.table.lock:
            if clear:
                self.table.clear()
            report.functions_found = scan_text(
                unit.text, self.table, source=unit.identifier
            )
        report.files_processed = 1
        report.info(f"Parsed {report.functions_found} functions from {file_path.name}")
        return report

    def parse_project(self, root: str | Path, *, clear: bool = True) -> ScanReport:
        """Parse a project directory through its include graph."""
        report = ScanReport()
        root_path = Path(root).expanduser().resolve()
        if not root_path.is_dir():
            report.error(f"Project directory not found: {root_path}")
            return report

        try:
            with self.table.lock:
                result = parse_project(root_path, self.table, clear=clear)
                self.parsed_roots.add(normalize_path(root_path))
        except OSError as exc:
            logger.error("Error parsing project %s: %s", root_path, exc, exc_info=True)
            report.error(f"Error parsing project {root_path.name}: {exc}")
            return report

        report.functions_found = result.functions_found
        report.files_processed = len(result.files)
        for including_file, include in result.missing_includes:
            report.warning(f"Include {include!r} from {including_file} not found")
        report.info(
            f"Parsed {result.functions_found} functions from "
            f"{len(result.files)} files in {root_path.name}"
        )
        return report

    def _find_project_root(self, document_path: Path) -> Path | None:
        for directory in document_path.parents:
            if find_root_lumps(directory):
                return directory
        return None

    def open_document(self, document: DocumentView) -> ScanReport | None:
        """Parse the project owning a newly focused document, once per root.

        Built-in signatures already in the table are kept. Returns None when
        there is nothing to do.
        """
        if document.language_id != self.config.language_id or not document.path:
            return None

        root = self._find_project_root(Path(document.path).expanduser().resolve())
        if root is None:
            return None

        with self.table.lock:
            if normalize_path(root) in self.parsed_roots:
                return None
            return self.parse_project(root, clear=False)

    def lookup(self, name: str) -> FunctionSignature | None:
        return self.table.lookup(name)

    def signature_help(self, document: DocumentView) -> SignatureHelp | None:
        try:
            return provide_signature_help(
                self.table, document, language_id=self.config.language_id
            )
        except Exception:
            logger.exception("Signature help failed")
            return None

    def completions(self, document: DocumentView) -> list[CompletionItem]:
        try:
            return provide_completions(
                self.table, document, language_id=self.config.language_id
            )
        except Exception:
            logger.exception("Completion failed")
            return []


__all__ = [
    "FileListing",
    "Notice",
    "ScanReport",
    "SignatureSession",
]
