from __future__ import annotations

import threading

import pytest

from parse.declarations import extract_signature
from parse.scanner import scan_text
from signatures.table import SignatureTable

FOO_SOURCE = """\
class Foo
{
  native void Bar(int x, string y = "z");
  virtual int Baz() { return 0; }
}
"""


@pytest.fixture
def foo_table() -> SignatureTable:
    table = SignatureTable()
    scan_text(FOO_SOURCE, table)
    return table


@pytest.mark.parametrize("prefix", ["Ba", "ba", "BA", "bA"])
def test_completions_are_case_insensitive(
    foo_table: SignatureTable, prefix: str
) -> None:
    names = sorted(item.name for item in foo_table.completions(prefix))

    assert names == ["Bar", "Baz"]


def test_completion_items_carry_label_and_documentation(
    foo_table: SignatureTable,
) -> None:
    (item,) = foo_table.completions("bar")

    assert item.label == 'void Bar(int x, string y = "z")'
    assert item.documentation == "Built-in function. Defined in: class Foo"


def test_empty_prefix_returns_everything(foo_table: SignatureTable) -> None:
    assert len(foo_table.completions("")) == 2


def test_lookup_is_case_insensitive(foo_table: SignatureTable) -> None:
    assert foo_table.lookup("BAR") is foo_table.lookup("bar")
    assert foo_table.lookup("missing") is None
    assert "Baz" in foo_table
    assert 42 not in foo_table


def test_store_overwrites_same_folded_name() -> None:
    table = SignatureTable()
    first = extract_signature("native void Spawn(int a);")
    second = extract_signature("native Actor SPAWN(class<Actor> type, vector3 pos);")
    assert first is not None
    assert second is not None

    table.store(first)
    table.store(second)

    assert len(table) == 1
    assert table.lookup("spawn") is second


def test_clear_empties_the_table(foo_table: SignatureTable) -> None:
    foo_table.clear()

    assert len(foo_table) == 0
    assert foo_table.completions("") == []


def test_concurrent_scans_do_not_lose_entries() -> None:
    table = SignatureTable()
    sources = [
        f"class C{i}\n{{\n  native void Func{i}(int v);\n}}\n" for i in range(20)
    ]
    threads = [
        threading.Thread(target=scan_text, args=(source, table)) for source in sources
    ]

    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(table) == 20
