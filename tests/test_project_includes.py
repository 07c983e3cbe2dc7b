from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from parse.scanner import scan_text
from scan.project import (
    find_root_lumps,
    is_root_lump,
    parse_project,
    resolve_include,
)
from signatures.table import SignatureTable

FIXTURE = Path(__file__).parent / "fixtures" / "mini_mod"


@pytest.fixture
def mod_root(tmp_path: Path) -> Path:
    root = tmp_path / "mini_mod"
    shutil.copytree(FIXTURE, root)
    return root.resolve()


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("zscript", True),
        ("ZSCRIPT.txt", True),
        ("zscript.zs", True),
        ("zscripts.txt", False),
        ("decorate.txt", False),
    ],
)
def test_is_root_lump(name: str, expected: bool) -> None:
    assert is_root_lump(name) is expected


def test_find_root_lumps_ignores_directories(mod_root: Path) -> None:
    assert find_root_lumps(mod_root) == [mod_root / "zscript.txt"]


def test_parse_project_follows_includes(mod_root: Path) -> None:
    table = SignatureTable()

    result = parse_project(mod_root, table)

    assert result.functions_found == 4
    assert sorted(sig.name for sig in table) == ["A_FancyFire", "DivMod", "Lerp", "Tick"]
    assert len(result.files) == 3


def test_include_cycle_parses_each_file_once(mod_root: Path) -> None:
    table = SignatureTable()

    result = parse_project(mod_root, table)

    names = [Path(f).name.lower() for f in result.files]
    assert names.count("math.zs") == 1
    assert names.count("imp.zs") == 1


def test_missing_include_is_reported(mod_root: Path) -> None:
    result = parse_project(mod_root, SignatureTable())

    assert [include for _, include in result.missing_includes] == [
        "zscript/missing.zs"
    ]


def test_commented_include_is_not_followed(mod_root: Path) -> None:
    result = parse_project(mod_root, SignatureTable())

    assert all("disabled" not in include for _, include in result.missing_includes)


def test_project_signatures_carry_location(mod_root: Path) -> None:
    table = SignatureTable()
    parse_project(mod_root, table)

    fire = table.lookup("a_fancyfire")
    assert fire is not None
    assert fire.line == 7
    assert fire.documentation == "Built-in function. Defined in: class FancyImp"
    assert fire.source is not None
    assert fire.source.endswith("imp.zs")
    assert [p.name for p in fire.parameters] == ["missile", "angleOfs", "flags"]

    divmod_ = table.lookup("DivMod")
    assert divmod_ is not None
    assert divmod_.return_type == "int, int"
    assert divmod_.documentation == "Built-in function. Defined in: struct FancyMath"


def test_parse_project_clear_flag(mod_root: Path) -> None:
    table = SignatureTable()
    scan_text("class Base\n{\n  native void Keep();\n}\n", table)

    parse_project(mod_root, table, clear=False)
    assert "Keep" in table
    assert len(table) == 5

    parse_project(mod_root, table)
    assert "Keep" not in table
    assert len(table) == 4


def test_shared_visited_set_skips_files_across_passes(mod_root: Path) -> None:
    visited: set[str] = set()
    table = SignatureTable()

    first = parse_project(mod_root, table, visited=visited)
    second = parse_project(mod_root, table, visited=visited, clear=False)

    assert first.functions_found == 4
    assert second.functions_found == 0
    assert len(table) == 4


def test_resolve_include_prefers_project_root(mod_root: Path) -> None:
    including = mod_root / "zscript" / "actors" / "imp.zs"

    resolved = resolve_include(
        "zscript/util/math.zs", project_root=mod_root, including_file=including
    )

    assert resolved == mod_root / "zscript" / "util" / "math.zs"


def test_resolve_include_falls_back_to_including_directory(mod_root: Path) -> None:
    including = mod_root / "zscript" / "util" / "math.zs"

    resolved = resolve_include("MATH.zs", project_root=mod_root, including_file=including)

    assert resolved is not None
    assert resolved.parent == mod_root / "zscript" / "util"


def test_resolve_include_ignores_case(mod_root: Path) -> None:
    resolved = resolve_include(
        "ZScript/Util/Math.zs",
        project_root=mod_root,
        including_file=mod_root / "zscript.txt",
    )

    assert resolved is not None
    assert resolved.name.lower() == "math.zs"


def test_resolve_include_missing(mod_root: Path) -> None:
    assert (
        resolve_include(
            "zscript/missing.zs",
            project_root=mod_root,
            including_file=mod_root / "zscript.txt",
        )
        is None
    )
