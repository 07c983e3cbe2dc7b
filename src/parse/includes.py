"""``#include`` directive extraction for ZScript sources."""

from __future__ import annotations

import re

from parse.comments import strip_comments

_INCLUDE_DIRECTIVE = re.compile(
    r'^\s*#include\s+"(?P<path>[^"]+)"', re.IGNORECASE | re.MULTILINE
)


def extract_includes(text: str) -> list[str]:
    """Return the include paths named by ``#include "..."`` lines, in order.

    Commented-out directives are ignored. Backslashes are normalised to
    forward slashes.

    Examples:
        >>> extract_includes('#include "zscript/actors/imp.zs"\\n')
        ['zscript/actors/imp.zs']
    """
    return [
        match.group("path").strip().replace("\\", "/")
        for match in _INCLUDE_DIRECTIVE.finditer(strip_comments(text))
    ]


__all__ = ["extract_includes"]
