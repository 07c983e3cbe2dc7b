from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.utils import _load_jsonl, _write_jsonl
from signatures.models import FunctionSignature

if TYPE_CHECKING:
    from pathlib import Path

    from signatures.table import SignatureTable

SIGNATURES_JSONL = "signatures.jsonl"


def write_signatures(path: Path, table: SignatureTable) -> int:
    """Write the signature table as JSONL, one record per lookup key.

    Records are ordered by key so repeated exports of the same table are
    byte-identical.

    Args:
        path: Output file, or a directory that receives ``signatures.jsonl``
        table: Table to export

    Returns:
        Number of records written.
    """
    if path.is_dir():
        path = path / SIGNATURES_JSONL
    path.parent.mkdir(parents=True, exist_ok=True)

    records = sorted(table.signatures(), key=lambda s: s.key)
    _write_jsonl(path, records)
    return len(records)


def read_signatures(path: Path) -> list[FunctionSignature]:
    """Load signatures previously written by ``write_signatures``."""
    return [FunctionSignature.model_validate(record) for record in _load_jsonl(path)]
