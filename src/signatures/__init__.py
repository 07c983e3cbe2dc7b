"""Signature records and the lookup table."""

from signatures.models import (
    CompletionItem,
    EnclosingType,
    FunctionSignature,
    ParameterDescriptor,
    SignatureHelp,
    fold_name,
)
from signatures.table import SignatureTable

__all__ = [
    "CompletionItem",
    "EnclosingType",
    "FunctionSignature",
    "ParameterDescriptor",
    "SignatureHelp",
    "SignatureTable",
    "fold_name",
]
