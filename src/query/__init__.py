"""Cursor-driven queries against the signature table."""

from query.providers import (
    DocumentView,
    provide_completions,
    provide_signature_help,
)
from query.resolver import (
    CallContext,
    find_call_context,
    match_parameter,
    resolve_active_parameter,
)

__all__ = [
    "CallContext",
    "DocumentView",
    "find_call_context",
    "match_parameter",
    "provide_completions",
    "provide_signature_help",
    "resolve_active_parameter",
]
