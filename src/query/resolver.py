"""Active-parameter resolution for calls being typed.

Given the argument text between an unmatched ``(`` and the cursor, work out
which declared parameter the user is currently supplying. Named arguments
(``name: value``) may appear in any order and may be abbreviated to a prefix
of the declared parameter name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from signatures.models import FunctionSignature

_TRAILING_IDENTIFIER = re.compile(r"(\w+)\s*$", re.ASCII)


@dataclass(frozen=True)
class CallContext:
    """The call surrounding the cursor."""

    name: str
    args_text: str


def find_call_context(text_before_cursor: str) -> CallContext | None:
    """Find the function name and argument text for the call around the cursor.

    Scans forward to the cursor keeping a stack of open parentheses, skipping
    quoted strings. A string still open at the cursor (an argument being
    typed) does not hide the call. The innermost unmatched ``(`` with an
    identifier in front of it wins; grouping parens are passed over.

    Examples:
        >>> find_call_context("A_SpawnItemEx(type: 'x', ")
        CallContext(name='A_SpawnItemEx', args_text="type: 'x', ")
        >>> find_call_context("x = 1;") is None
        True
    """
    open_parens: list[int] = []
    in_string = False
    string_char = ""

    for i, char in enumerate(text_before_cursor):
        if in_string:
            if char == string_char and text_before_cursor[i - 1] != "\\":
                in_string = False
            continue

        if char in ('"', "'"):
            in_string = True
            string_char = char
        elif char == "(":
            open_parens.append(i)
        elif char == ")" and open_parens:
            open_parens.pop()

    for index in reversed(open_parens):
        match = _TRAILING_IDENTIFIER.search(text_before_cursor[:index])
        if match is not None:
            return CallContext(
                name=match.group(1),
                args_text=text_before_cursor[index + 1 :],
            )

    return None


def _is_identifier_start(candidate: str) -> bool:
    return bool(candidate) and (candidate[0].isalpha() or candidate[0] == "_")


def match_parameter(parameter_names: list[str], candidate: str) -> int | None:
    """Find the parameter a (possibly abbreviated) argument name refers to.

    An exact case-insensitive match wins; otherwise the first parameter, in
    declaration order, whose name starts with the candidate. The direction is
    fixed: ``bx`` does not match a parameter named ``b``.
    """
    folded = candidate.strip().casefold()
    if not folded:
        return None

    names = [name.casefold() for name in parameter_names]
    for index, name in enumerate(names):
        if name == folded:
            return index
    for index, name in enumerate(names):
        if name.startswith(folded):
            return index
    return None


def _next_unconsumed(cursor: int, consumed: set[int]) -> int:
    while cursor in consumed:
        cursor += 1
    return cursor


def resolve_active_parameter(signature: FunctionSignature, args_text: str) -> int:
    """Return the 0-based index of the parameter being typed.

    Never raises: malformed argument text degrades to positional matching
    and, at worst, index 0.

    Examples:
        >>> from parse.declarations import extract_signature
        >>> sig = extract_signature("void f(int a, int b, int c);")
        >>> resolve_active_parameter(sig, "b: 1, ")
        2
    """
    names = signature.parameter_names()
    slots = args_text.split(",")
    supplied, current = slots[:-1], slots[-1]

    consumed: set[int] = set()
    cursor = 0

    for slot in supplied:
        if ":" in slot:
            index = match_parameter(names, slot.split(":", 1)[0])
            if index is not None:
                consumed.add(index)
                cursor = index + 1
            continue

        cursor = _next_unconsumed(cursor, consumed)
        consumed.add(cursor)
        cursor += 1

    candidate = current.split(":", 1)[0] if ":" in current else current
    candidate = candidate.strip()
    if _is_identifier_start(candidate):
        index = match_parameter(names, candidate)
        if index is not None:
            return index

    return _next_unconsumed(cursor, consumed)


__all__ = [
    "CallContext",
    "find_call_context",
    "match_parameter",
    "resolve_active_parameter",
]
