from __future__ import annotations

import pytest

from parse.scanner import scan_text
from query.providers import (
    DocumentView,
    provide_completions,
    provide_signature_help,
    word_prefix,
)
from signatures.table import SignatureTable

BUILTINS = """\
class Actor
{
  native Actor, bool A_SpawnItemEx(class<Actor> missile, double xofs = 0, double yofs = 0, int flags = 0);
  native void A_Log(string whattoprint, bool local = false);
}
"""


@pytest.fixture
def table() -> SignatureTable:
    table = SignatureTable()
    scan_text(BUILTINS, table)
    return table


def _cursor_at_end(text: str, language_id: str = "zscript") -> DocumentView:
    lines = text.split("\n")
    return DocumentView(
        text=text,
        line=len(lines) - 1,
        character=len(lines[-1]),
        language_id=language_id,
    )


def test_signature_help_reports_active_parameter(table: SignatureTable) -> None:
    document = _cursor_at_end("override void Tick()\n{\n  A_SpawnItemEx(\"Imp\", flags: 1, ")

    help_ = provide_signature_help(table, document)

    assert help_ is not None
    assert help_.active_signature == 0
    assert help_.signatures[0].name == "A_SpawnItemEx"
    assert help_.active_parameter == 4


def test_signature_help_uses_only_text_before_cursor(table: SignatureTable) -> None:
    document = DocumentView(text="A_Log(\"hi\", true);", line=0, character=12)

    help_ = provide_signature_help(table, document)

    assert help_ is not None
    assert help_.active_parameter == 1


def test_signature_help_lookup_ignores_case(table: SignatureTable) -> None:
    help_ = provide_signature_help(table, _cursor_at_end("a_log("))

    assert help_ is not None
    assert help_.signatures[0].name == "A_Log"


def test_signature_help_unknown_function(table: SignatureTable) -> None:
    assert provide_signature_help(table, _cursor_at_end("Unknown(1, ")) is None


def test_signature_help_requires_zscript_document(table: SignatureTable) -> None:
    document = _cursor_at_end("A_Log(", language_id="cpp")

    assert provide_signature_help(table, document) is None


def test_cursor_outside_document_yields_nothing(table: SignatureTable) -> None:
    document = DocumentView(text="A_Log(", line=5, character=3)

    assert provide_signature_help(table, document) is None
    assert provide_completions(table, document) == []


def test_completions_for_word_at_cursor(table: SignatureTable) -> None:
    items = provide_completions(table, _cursor_at_end("  a_sp"))

    assert [item.name for item in items] == ["A_SpawnItemEx"]
    assert items[0].label.startswith("Actor, bool A_SpawnItemEx(")


def test_completions_require_zscript_document(table: SignatureTable) -> None:
    assert provide_completions(table, _cursor_at_end("A_", language_id="decorate")) == []


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("A_Sp", "A_Sp"),
        ("x = A_Sp", "A_Sp"),
        ("Foo(", None),
        ("", None),
        ("x ", None),
    ],
)
def test_word_prefix(text: str, expected: str | None) -> None:
    assert word_prefix(text) == expected
