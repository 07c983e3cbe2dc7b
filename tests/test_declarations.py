from __future__ import annotations

import pytest

from parse.declarations import (
    extract_signature,
    match_declaration,
    match_type_declaration,
)
from signatures.models import BUILTIN_DOCUMENTATION, EnclosingType


def test_match_declaration_named_captures() -> None:
    match = match_declaration('native void Bar(int x, string y = "z");')

    assert match is not None
    assert match.qualifiers == ("native",)
    assert match.return_type == "void"
    assert match.name == "Bar"
    assert match.params == 'int x, string y = "z"'
    assert match.terminator == ";"


def test_parameterized_qualifiers_are_captured() -> None:
    match = match_declaration(
        'deprecated("4.2", "Use Spawn instead") version("2.4") static Actor Create(class<Actor> type) {'
    )

    assert match is not None
    assert match.qualifiers == (
        'deprecated("4.2", "Use Spawn instead")',
        'version("2.4")',
        "static",
    )
    assert match.return_type == "Actor"
    assert match.name == "Create"
    assert match.terminator == "{"


def test_multiple_return_values() -> None:
    match = match_declaration("static clearscope int, int DivMod(int num, int den);")

    assert match is not None
    assert match.return_type == "int, int"
    assert match.name == "DivMod"


def test_variadic_parameter_list() -> None:
    match = match_declaration("native static vararg void Printf(string fmt, ...);")

    assert match is not None
    assert match.params == "string fmt, ..."


def test_trailing_const_qualifier() -> None:
    match = match_declaration("native int GetHealth() const;")

    assert match is not None
    assert match.name == "GetHealth"


@pytest.mark.parametrize(
    "line",
    [
        "int health;",
        "default",
        "States",
        "Spawn: TNT1 A 0;",
    ],
)
def test_non_declarations_do_not_match(line: str) -> None:
    assert match_declaration(line) is None


@pytest.mark.parametrize("name", ["if", "else", "while", "for", "return", "struct", "class"])
def test_reserved_names_are_rejected(name: str) -> None:
    assert extract_signature(f"native void {name}(int x);") is None


def test_missing_return_type_defaults_to_void() -> None:
    signature = extract_signature(" Foo(int a) {")

    assert signature is not None
    assert signature.return_type == "void"
    assert signature.label == "void Foo(int a)"


def test_label_keeps_raw_parameter_text() -> None:
    signature = extract_signature(
        "action void A_Jump(int  chance,   statelabel label = null);"
    )

    assert signature is not None
    assert signature.label == "void A_Jump(int  chance,   statelabel label = null)"
    assert signature.parameter_names() == ["chance", "label"]


def test_documentation_mentions_enclosing_type() -> None:
    enclosing = EnclosingType(kind="struct", name="Vector3Util")

    inside = extract_signature("static double Len(Vector3 v);", enclosing=enclosing)
    outside = extract_signature("static double Len(Vector3 v);")

    assert inside is not None
    assert outside is not None
    assert inside.documentation == "Built-in function. Defined in: struct Vector3Util"
    assert outside.documentation == BUILTIN_DOCUMENTATION


def test_signature_key_is_case_folded() -> None:
    signature = extract_signature("native void A_StartSound(sound whattoplay);")

    assert signature is not None
    assert signature.name == "A_StartSound"
    assert signature.key == "a_startsound"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("class Foo", ("class", "Foo")),
        ("class DoomImp : Actor replaces Imp", ("class", "DoomImp")),
        ("extend class Actor", ("class", "Actor")),
        ("struct Vec {", ("struct", "Vec")),
        ("enum EFlags", None),
    ],
)
def test_match_type_declaration(line: str, expected: tuple[str, str] | None) -> None:
    assert match_type_declaration(line) == expected
