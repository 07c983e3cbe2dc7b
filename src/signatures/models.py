"""Signature models for ZScript declarations.

This module contains the records produced by the scanner (enclosing types,
parameters, function signatures) and the shapes returned to the editor
(completion items, signature help).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

VOID_RETURN_TYPE = "void"
BUILTIN_DOCUMENTATION = "Built-in ZScript function"
PLACEHOLDER_PARAMETER_NAME = "param"

TypeKind = Literal["class", "struct"]


def fold_name(name: str) -> str:
    """Return the case-insensitive lookup key for an identifier."""
    return name.casefold()


class EnclosingType(BaseModel):
    """The class or struct whose body is open at the current scan position."""

    kind: TypeKind
    name: str

    def describe(self) -> str:
        return f"{self.kind} {self.name}"


class ParameterDescriptor(BaseModel):
    """One formal parameter of a declaration."""

    name: str
    declared_type: str
    position: int = Field(description="0-based index within the signature")


class FunctionSignature(BaseModel):
    """A function declaration extracted from ZScript source."""

    name: str = Field(description="Function name as written in source")
    key: str = Field(description="Case-folded lookup key")
    return_type: str = Field(default=VOID_RETURN_TYPE)
    parameters: list[ParameterDescriptor] = Field(default_factory=list)
    label: str
    documentation: str = Field(default=BUILTIN_DOCUMENTATION)
    qualifiers: list[str] = Field(default_factory=list)
    source: str | None = Field(
        default=None, description="File path or archive entry the declaration came from"
    )
    line: int | None = Field(
        default=None, description="1-based line number of the declaration"
    )

    def parameter_names(self) -> list[str]:
        return [param.name for param in self.parameters]


class CompletionItem(BaseModel):
    """A completion candidate offered for an identifier prefix."""

    name: str
    label: str
    documentation: str


class SignatureHelp(BaseModel):
    """Signature help answer for a cursor inside an open argument list."""

    signatures: list[FunctionSignature]
    active_signature: int = 0
    active_parameter: int = 0


__all__ = [
    "BUILTIN_DOCUMENTATION",
    "PLACEHOLDER_PARAMETER_NAME",
    "VOID_RETURN_TYPE",
    "CompletionItem",
    "EnclosingType",
    "FunctionSignature",
    "ParameterDescriptor",
    "SignatureHelp",
    "TypeKind",
    "fold_name",
]
