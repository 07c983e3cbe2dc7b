"""Case-insensitive signature table."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from signatures.models import CompletionItem, fold_name

if TYPE_CHECKING:
    from collections.abc import Iterator

    from signatures.models import FunctionSignature


class SignatureTable:
    """Mapping of case-folded function name -> most recently seen signature.

    A later store of a same-named function replaces the earlier entry; there
    are no overload sets and no removal by key, only ``clear``. Mutations and
    reads go through a re-entrant lock so a scan triggered from one caller
    cannot interleave with another caller's scan or query.
    """

    def __init__(self) -> None:
        self._entries: dict[str, FunctionSignature] = {}
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def store(self, signature: FunctionSignature) -> None:
        with self._lock:
            self._entries[signature.key] = signature

    def lookup(self, name: str) -> FunctionSignature | None:
        with self._lock:
            return self._entries.get(fold_name(name))

    def completions(self, prefix: str) -> list[CompletionItem]:
        """Return completion items for every entry whose key starts with prefix."""
        folded = fold_name(prefix)
        with self._lock:
            return [
                CompletionItem(
                    name=signature.name,
                    label=signature.label,
                    documentation=signature.documentation,
                )
                for key, signature in self._entries.items()
                if key.startswith(folded)
            ]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def signatures(self) -> list[FunctionSignature]:
        with self._lock:
            return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and fold_name(name) in self._entries

    def __iter__(self) -> Iterator[FunctionSignature]:
        return iter(self.signatures())


__all__ = ["SignatureTable"]
