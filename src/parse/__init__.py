"""Parsing utilities for ZScript sources."""

from parse.comments import strip_comments
from parse.declarations import (
    DeclarationMatch,
    extract_signature,
    match_declaration,
    match_type_declaration,
)
from parse.includes import extract_includes
from parse.parameters import decompose_parameters
from parse.scanner import ScanState, extract_signatures, scan_text

__all__ = [
    "DeclarationMatch",
    "ScanState",
    "decompose_parameters",
    "extract_includes",
    "extract_signature",
    "extract_signatures",
    "match_declaration",
    "match_type_declaration",
    "scan_text",
    "strip_comments",
]
