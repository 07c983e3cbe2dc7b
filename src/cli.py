"""Command-line interface for zscript-signatures."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.write import write_signatures
from query.providers import DocumentView
from rules.config import ConfigError, load_config
from scan.files import find_project_roots
from scan.project import find_root_lumps
from session import ScanReport, SignatureSession

EXIT_OK = 0
EXIT_NO_RESULT = 1
EXIT_ERROR = 2


def _add_out(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--out",
        default=None,
        help="Write the signature table as JSONL to this file or directory",
    )


def _add_pk3(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--pk3",
        default=None,
        help="Archive with built-in scripts (default: gzdoom_pk3_path setting)",
    )


def _add_sources(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "sources",
        nargs="*",
        default=[],
        help="Script files or project directories to load",
    )
    _add_pk3(parser)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zsig")
    parser.add_argument(
        "--config-root",
        default=".",
        help="Directory holding zscript.toml (default: .)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log the full scan trail at debug level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    pk3_parser = subparsers.add_parser(
        "parse-pk3", help="Parse built-in signatures from an archive"
    )
    _add_pk3(pk3_parser)
    _add_out(pk3_parser)

    file_parser = subparsers.add_parser("parse-file", help="Parse a single file")
    file_parser.add_argument("file", help="Script file to parse")
    _add_out(file_parser)

    project_parser = subparsers.add_parser(
        "parse-project", help="Parse a project (or every project in a workspace)"
    )
    project_parser.add_argument("root", help="Project or workspace directory")
    _add_out(project_parser)

    list_parser = subparsers.add_parser(
        "list-files", help="List archive script files and their first lines"
    )
    _add_pk3(list_parser)

    help_parser = subparsers.add_parser(
        "signature-help", help="Show the active parameter for a call being typed"
    )
    _add_sources(help_parser)
    help_parser.add_argument(
        "--text", required=True, help="Line text up to the cursor"
    )

    complete_parser = subparsers.add_parser(
        "complete", help="List functions completing a prefix"
    )
    _add_sources(complete_parser)
    complete_parser.add_argument("--prefix", required=True, help="Identifier prefix")

    return parser


def _emit(report: ScanReport) -> None:
    for notice in report.notices:
        stream = sys.stdout if notice.level == "info" else sys.stderr
        prefix = "" if notice.level == "info" else f"{notice.level}: "
        stream.write(f"{prefix}{notice.message}\n")


def _finish(session: SignatureSession, report: ScanReport, out: str | None) -> int:
    _emit(report)
    if not report.ok:
        return EXIT_ERROR
    if out is not None:
        count = write_signatures(Path(out).expanduser().resolve(), session.table)
        sys.stdout.write(f"Wrote {count} signatures to {out}\n")
    return EXIT_OK


def _handle_parse_project(session: SignatureSession, root: Path) -> ScanReport:
    if not root.is_dir() or find_root_lumps(root):
        return session.parse_project(root)

    combined = ScanReport()
    session.table.clear()
    for project_root in find_project_roots(
        root, nested_gitignore=session.config.nested_gitignore
    ):
        report = session.parse_project(project_root, clear=False)
        combined.notices.extend(report.notices)
        combined.functions_found += report.functions_found
        combined.files_processed += report.files_processed

    if combined.files_processed == 0 and combined.ok:
        combined.warning(f"No zscript lumps found under {root}")
    return combined


def _load_sources(session: SignatureSession, args: argparse.Namespace) -> ScanReport:
    combined = ScanReport()
    if args.pk3 or session.config.archive_path() is not None:
        combined = session.parse_archive(args.pk3)
        if not combined.ok:
            return combined

    for source in args.sources:
        path = Path(source).expanduser()
        if path.is_dir():
            report = session.parse_project(path, clear=False)
        else:
            report = session.parse_file(path, clear=False)
        combined.notices.extend(n for n in report.notices if n.level != "info")
        combined.functions_found += report.functions_found
        combined.files_processed += report.files_processed
    return combined


def _handle_signature_help(session: SignatureSession, text: str) -> int:
    document = DocumentView(
        text=text, line=0, character=len(text), language_id=session.config.language_id
    )
    help_ = session.signature_help(document)
    if help_ is None:
        sys.stderr.write("No signature found at cursor\n")
        return EXIT_NO_RESULT

    signature = help_.signatures[help_.active_signature]
    sys.stdout.write(f"{signature.label}\n")
    if 0 <= help_.active_parameter < len(signature.parameters):
        param = signature.parameters[help_.active_parameter]
        sys.stdout.write(
            f"active parameter: {help_.active_parameter} "
            f"({param.declared_type} {param.name})\n"
        )
    else:
        sys.stdout.write(f"active parameter: {help_.active_parameter}\n")
    sys.stdout.write(f"{signature.documentation}\n")
    return EXIT_OK


def _handle_complete(session: SignatureSession, prefix: str) -> int:
    document = DocumentView(
        text=prefix,
        line=0,
        character=len(prefix),
        language_id=session.config.language_id,
    )
    items = session.completions(document)
    for item in items:
        sys.stdout.write(f"{item.name}\t{item.label}\n")
    return EXIT_OK if items else EXIT_NO_RESULT


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(Path(args.config_root).expanduser().resolve())
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_ERROR

    session = SignatureSession(config)

    if args.command == "parse-pk3":
        return _finish(session, session.parse_archive(args.pk3), args.out)

    if args.command == "parse-file":
        return _finish(session, session.parse_file(args.file), args.out)

    if args.command == "parse-project":
        root = Path(args.root).expanduser().resolve()
        return _finish(session, _handle_parse_project(session, root), args.out)

    if args.command == "list-files":
        report = session.list_script_files(args.pk3)
        for listing in report.listings:
            sys.stdout.write(f"{listing.name}\n")
            for index, line in enumerate(listing.lines):
                sys.stdout.write(f"  {index}: {line}\n")
        _emit(report)
        return EXIT_OK if report.ok else EXIT_ERROR

    if args.command in {"signature-help", "complete"}:
        report = _load_sources(session, args)
        if not report.ok:
            _emit(report)
            return EXIT_ERROR
        if args.command == "signature-help":
            return _handle_signature_help(session, args.text)
        return _handle_complete(session, args.prefix)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
