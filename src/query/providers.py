"""Editor-facing signature help and completion providers."""

from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass
from typing import TYPE_CHECKING

from query.resolver import find_call_context, resolve_active_parameter
from signatures.models import SignatureHelp

if TYPE_CHECKING:
    from signatures.models import CompletionItem
    from signatures.table import SignatureTable

logger = logging.getLogger(__name__)

LANGUAGE_ID = "zscript"
SIGNATURE_HELP_TRIGGERS = ("(", ",", ":")
COMPLETION_TRIGGERS = tuple(string.ascii_letters)

_WORD_PREFIX = re.compile(r"\b(\w*)$", re.ASCII)


@dataclass(frozen=True)
class DocumentView:
    """What the editor exposes about the active document.

    ``line`` and ``character`` are the 0-based cursor position.
    """

    text: str
    line: int
    character: int
    language_id: str = LANGUAGE_ID
    path: str | None = None

    def text_before_cursor(self) -> str:
        """Get the text on the cursor's line before the cursor."""
        lines = self.text.split("\n")
        if 0 <= self.line < len(lines):
            return lines[self.line][: self.character]
        return ""


def provide_signature_help(
    table: SignatureTable,
    document: DocumentView,
    *,
    language_id: str = LANGUAGE_ID,
) -> SignatureHelp | None:
    """Answer a signature help request for the call around the cursor."""
    if document.language_id != language_id:
        return None

    context = find_call_context(document.text_before_cursor())
    if context is None:
        return None

    signature = table.lookup(context.name)
    if signature is None:
        logger.debug("No signature found for function: %s", context.name)
        return None

    active_parameter = resolve_active_parameter(signature, context.args_text)
    logger.debug(
        "Providing signature help for %s, active param index: %d",
        context.name,
        active_parameter,
    )
    return SignatureHelp(
        signatures=[signature],
        active_signature=0,
        active_parameter=active_parameter,
    )


def word_prefix(text_before_cursor: str) -> str | None:
    """Return the identifier fragment that ends at the cursor, or None."""
    match = _WORD_PREFIX.search(text_before_cursor)
    if match is None:
        return None
    return match.group(1)


def provide_completions(
    table: SignatureTable,
    document: DocumentView,
    *,
    language_id: str = LANGUAGE_ID,
) -> list[CompletionItem]:
    """Answer a completion request for the identifier prefix at the cursor."""
    if document.language_id != language_id:
        return []

    prefix = word_prefix(document.text_before_cursor())
    if prefix is None:
        return []

    items = table.completions(prefix)
    logger.debug("Providing %d completion items for prefix: %r", len(items), prefix)
    return items


__all__ = [
    "COMPLETION_TRIGGERS",
    "LANGUAGE_ID",
    "SIGNATURE_HELP_TRIGGERS",
    "DocumentView",
    "provide_completions",
    "provide_signature_help",
    "word_prefix",
]
