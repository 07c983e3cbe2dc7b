"""Parameter list decomposition for ZScript declarations."""

from __future__ import annotations

import re

from signatures.models import PLACEHOLDER_PARAMETER_NAME, ParameterDescriptor

_PARAM_SEPARATOR = re.compile(r"\s*,\s*")
_LEADING_IDENTIFIER = re.compile(r"^(\w+)", re.ASCII)
_GENERIC_CLASS_PREFIX = "class<"


def _split_type_and_rest(param: str) -> tuple[str, str]:
    """Split one parameter into its declared type and its name/default text."""
    parts = param.split()
    declared_type = parts[0]
    rest = " ".join(parts[1:])

    # class<Actor> is a single type token even if written as class< Actor >
    if declared_type.startswith(_GENERIC_CLASS_PREFIX) and ">" in param:
        close_index = param.index(">")
        declared_type = param[: close_index + 1].strip()
        rest = param[close_index + 1 :].strip()

    return declared_type, rest


def decompose_parameters(raw: str) -> list[ParameterDescriptor]:
    """Split a raw parameter list into parameter descriptors.

    The list is split on every comma. Default values (``= ...``) are dropped
    from the stored name; a parameter without a usable name gets the
    placeholder name ``param``.

    Examples:
        >>> [p.name for p in decompose_parameters('int x, string y = "z"')]
        ['x', 'y']
        >>> decompose_parameters("class<Actor> a")[0].declared_type
        'class<Actor>'
    """
    raw = raw.strip()
    if not raw:
        return []

    pieces = [piece for piece in _PARAM_SEPARATOR.split(raw) if piece.strip()]

    descriptors: list[ParameterDescriptor] = []
    for position, piece in enumerate(pieces):
        declared_type, rest = _split_type_and_rest(piece.strip())
        name_match = _LEADING_IDENTIFIER.match(rest)
        name = name_match.group(1) if name_match else PLACEHOLDER_PARAMETER_NAME
        descriptors.append(
            ParameterDescriptor(
                name=name,
                declared_type=declared_type,
                position=position,
            )
        )

    return descriptors


__all__ = ["decompose_parameters"]
