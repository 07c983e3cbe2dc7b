"""Line-oriented structural scanner for ZScript sources.

The scanner tracks brace depth, joins multi-line statements into logical
lines, remembers the class/struct currently open at depth 0, and hands
depth-1 lines to the declaration grammar.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from parse.comments import strip_comments
from parse.declarations import extract_signature, is_else_if, match_type_declaration
from signatures.models import EnclosingType

if TYPE_CHECKING:
    from signatures.models import FunctionSignature
    from signatures.table import SignatureTable

logger = logging.getLogger(__name__)

MEMBER_DEPTH = 1


class ScanState:
    """Mutable state carried across the lines of one source unit."""

    def __init__(self) -> None:
        self.brace_depth = 0
        self.pending: list[str] = []
        self.pending_start: int | None = None
        self.enclosing: EnclosingType | None = None
        self.logical_lines = 0

    def is_statement_open(self, line: str) -> bool:
        """Return True when a line inside a body continues onto the next one."""
        if self.brace_depth < MEMBER_DEPTH:
            return False
        return not line.endswith((";", "{")) and not line.startswith("}")

    def count_braces(self, line: str, line_number: int) -> None:
        for char in line:
            if char == "{":
                self.brace_depth += 1
                logger.debug(
                    "Line %d brace depth increased to %d", line_number, self.brace_depth
                )
            elif char == "}":
                self.brace_depth = max(self.brace_depth - 1, 0)
                logger.debug(
                    "Line %d brace depth decreased to %d", line_number, self.brace_depth
                )
                if self.brace_depth == 0 and self.enclosing is not None:
                    logger.debug(
                        "Line %d exited %s", line_number, self.enclosing.describe()
                    )
                    self.enclosing = None


def _process_logical_line(
    state: ScanState,
    line: str,
    line_number: int,
    source: str | None,
) -> FunctionSignature | None:
    state.logical_lines += 1
    signature: FunctionSignature | None = None

    if state.brace_depth == 0:
        type_header = match_type_declaration(line)
        if type_header is not None:
            kind, name = type_header
            state.enclosing = EnclosingType(kind=kind, name=name)
            logger.debug("Line %d detected %s %s", line_number, kind, name)

    if state.brace_depth == MEMBER_DEPTH:
        if is_else_if(line):
            logger.debug("Line %d skipped (else if): %r", line_number, line)
        else:
            signature = extract_signature(
                line,
                enclosing=state.enclosing,
                source=source,
                line_number=line_number,
            )
    else:
        logger.debug(
            "Line %d skipped (depth %d): %r", line_number, state.brace_depth, line
        )

    state.count_braces(line, line_number)
    return signature


def extract_signatures(
    text: str,
    *,
    source: str | None = None,
    state: ScanState | None = None,
) -> list[FunctionSignature]:
    """Extract every depth-1 function signature from source text.

    Args:
        text: Raw ZScript source (comments are stripped here)
        source: Identifier recorded on each signature (path or archive entry)
        state: Optional state object, exposed so callers can inspect depth
            after the scan

    Returns:
        Signatures in source order. Duplicates are kept; collapsing by name
        is the table's job.
    """
    if state is None:
        state = ScanState()

    signatures: list[FunctionSignature] = []
    lines = strip_comments(text).split("\n")

    for index, raw_line in enumerate(lines):
        line_number = index + 1
        line = raw_line.strip()
        if not line:
            continue

        if state.is_statement_open(line):
            if not state.pending:
                state.pending_start = line_number
            state.pending.append(line)
            continue

        start_line = line_number
        if state.pending:
            line = " ".join([*state.pending, line])
            start_line = state.pending_start or line_number
            state.pending = []
            state.pending_start = None

        signature = _process_logical_line(state, line, start_line, source)
        if signature is not None:
            logger.debug(
                "Found function: %s at line %d (depth %d)",
                signature.label,
                start_line,
                state.brace_depth,
            )
            signatures.append(signature)

    if state.pending:
        logger.debug(
            "Discarded unterminated statement starting at line %s", state.pending_start
        )
        state.pending = []
        state.pending_start = None

    return signatures


def scan_text(
    text: str,
    table: SignatureTable,
    *,
    source: str | None = None,
) -> int:
    """Scan source text and store its signatures in the table.

    Returns the number of signatures found in this text (including ones that
    overwrote earlier entries).
    """
    logger.debug("Parsing %s", source or "<text>")
    signatures = extract_signatures(text, source=source)
    with table.lock:
        for signature in signatures:
            table.store(signature)
    logger.debug("Parsed %d functions from %s", len(signatures), source or "<text>")
    return len(signatures)


__all__ = ["MEMBER_DEPTH", "ScanState", "extract_signatures", "scan_text"]
