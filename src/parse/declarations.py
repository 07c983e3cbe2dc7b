"""Declaration grammar for ZScript function signatures.

The grammar is a single regular expression with named groups. Callers go
through ``match_declaration`` so the pattern can be replaced by a tokenizer
without touching the scanner.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from parse.parameters import decompose_parameters
from signatures.models import (
    BUILTIN_DOCUMENTATION,
    VOID_RETURN_TYPE,
    FunctionSignature,
    fold_name,
)

if TYPE_CHECKING:
    from signatures.models import EnclosingType

logger = logging.getLogger(__name__)

QUALIFIER_KEYWORDS = (
    "native",
    "static",
    "virtual",
    "protected",
    "private",
    "clearscope",
    "action",
    "ui",
    "play",
    "const",
    "override",
    "vararg",
    "out",
    "in",
    "readonly",
)

RESERVED_NAMES = frozenset({"if", "else", "while", "for", "return", "struct", "class"})

_PARAMETERIZED_QUALIFIERS = (
    r'deprecated\("[^"]*"(?:,\s*"[^"]*")?\)'
    r'|version\("[^"]*"\)'
)

_QUALIFIER = r"(?:" + "|".join(QUALIFIER_KEYWORDS) + "|" + _PARAMETERIZED_QUALIFIERS + ")"

DECLARATION_PATTERN = re.compile(
    r"(?P<qualifiers>(?:\b" + _QUALIFIER + r"\s+)*)"
    r"(?P<return_type>(?:\w+(?:\s+\w+)*(?:\s*,\s*\w+(?:\s+\w+)*)*)?)"
    r"\s+(?P<name>\w+)"
    r"\s*\(\s*(?P<params>[^)]*?(?:\s*,\s*\.\.\.)?)\s*\)"
    r"\s*(?:const)?\s*(?P<terminator>[;{])",
    re.ASCII,
)

TYPE_DECLARATION_PATTERN = re.compile(r"\b(?P<kind>class|struct)\s+(?P<name>\w+)", re.ASCII)

_QUALIFIER_TOKEN = re.compile(_PARAMETERIZED_QUALIFIERS + r"|\w+", re.ASCII)
_CALL_SHAPED = re.compile(r"\w+\s+\w+\s*\(", re.ASCII)
_ELSE_IF = re.compile(r"\belse\s+if\b")


@dataclass(frozen=True)
class DeclarationMatch:
    """Named captures of one declaration-shaped line."""

    qualifiers: tuple[str, ...]
    return_type: str
    name: str
    params: str
    terminator: str


def match_declaration(line: str) -> DeclarationMatch | None:
    """Match a logical line against the declaration grammar.

    Returns None when the line is not declaration shaped. ``return_type`` is
    the raw captured text and may be empty.
    """
    match = DECLARATION_PATTERN.search(line)
    if match is None:
        return None

    return DeclarationMatch(
        qualifiers=tuple(_QUALIFIER_TOKEN.findall(match.group("qualifiers"))),
        return_type=match.group("return_type"),
        name=match.group("name"),
        params=match.group("params").strip(),
        terminator=match.group("terminator"),
    )


def match_type_declaration(line: str) -> tuple[str, str] | None:
    """Return ``(kind, name)`` for a ``class``/``struct`` header line."""
    match = TYPE_DECLARATION_PATTERN.search(line)
    if match is None:
        return None
    return match.group("kind"), match.group("name")


def is_else_if(line: str) -> bool:
    return _ELSE_IF.search(line) is not None


def looks_like_call(line: str) -> bool:
    return _CALL_SHAPED.search(line) is not None


def build_documentation(enclosing: EnclosingType | None) -> str:
    if enclosing is None:
        return BUILTIN_DOCUMENTATION
    return f"Built-in function. Defined in: {enclosing.describe()}"


def extract_signature(
    line: str,
    *,
    enclosing: EnclosingType | None = None,
    source: str | None = None,
    line_number: int | None = None,
) -> FunctionSignature | None:
    """Build a FunctionSignature from a declaration-shaped line.

    Args:
        line: Logical line (comments stripped, continuation lines joined)
        enclosing: The class/struct open at this position, if any
        source: File path or archive entry name, kept on the record
        line_number: 1-based line the logical line started on

    Returns:
        The signature, or None when the line does not match or the captured
        name is a reserved word.
    """
    declaration = match_declaration(line)
    if declaration is None:
        if looks_like_call(line):
            logger.debug("Partial function match at line %s: %r", line_number, line)
        return None

    if declaration.name in RESERVED_NAMES:
        logger.debug(
            "Skipped reserved name %r at line %s: %r",
            declaration.name,
            line_number,
            line,
        )
        return None

    return_type = declaration.return_type or VOID_RETURN_TYPE
    label = f"{return_type} {declaration.name}({declaration.params})"

    return FunctionSignature(
        name=declaration.name,
        key=fold_name(declaration.name),
        return_type=return_type,
        parameters=decompose_parameters(declaration.params),
        label=label,
        documentation=build_documentation(enclosing),
        qualifiers=list(declaration.qualifiers),
        source=source,
        line=line_number,
    )


__all__ = [
    "DECLARATION_PATTERN",
    "QUALIFIER_KEYWORDS",
    "RESERVED_NAMES",
    "TYPE_DECLARATION_PATTERN",
    "DeclarationMatch",
    "build_documentation",
    "extract_signature",
    "is_else_if",
    "looks_like_call",
    "match_declaration",
    "match_type_declaration",
]
