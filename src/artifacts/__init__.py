"""Signature table export."""

from artifacts.write import SIGNATURES_JSONL, read_signatures, write_signatures

__all__ = ["SIGNATURES_JSONL", "read_signatures", "write_signatures"]
