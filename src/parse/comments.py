"""Comment removal for ZScript source text."""

from __future__ import annotations

import re

_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)


def _keep_newlines(match: re.Match[str]) -> str:
    return "\n" * match.group(0).count("\n")


def strip_comments(text: str) -> str:
    """Remove ``/* ... */`` and ``//`` comments from source text.

    Block comments are replaced by the newlines they spanned so line numbers
    computed on the result still point at the original source lines.

    String literals are not recognised: a ``//`` or ``/*`` inside a quoted
    string is removed like any other comment.
    """
    text = _BLOCK_COMMENT.sub(_keep_newlines, text)
    return _LINE_COMMENT.sub("", text)


__all__ = ["strip_comments"]
