"""Tests for spec file discovery."""

import textwrap
from pathlib import Path

import pytest

from scopespec.errors import DuplicateBindingError, SpecLoadError
from scopespec.testing import ExampleStatus, Runner, collect
from scopespec.testing.discovery import find_spec_files


def write(path: Path, source: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(source))
    return path


def test_find_spec_files_only_matches_suffix(tmp_path):
    write(tmp_path / "a_spec.py", "")
    write(tmp_path / "nested" / "b_spec.py", "")
    write(tmp_path / "helper.py", "")
    write(tmp_path / "spec_c.py", "")

    found = [p.relative_to(tmp_path.resolve()).as_posix() for p in find_spec_files(tmp_path)]

    assert found == ["a_spec.py", "nested/b_spec.py"]


def test_find_spec_files_single_file(tmp_path):
    spec = write(tmp_path / "one_spec.py", "")
    other = write(tmp_path / "other.py", "")

    assert find_spec_files(spec) == [spec.resolve()]
    assert find_spec_files(other) == []
    assert find_spec_files(tmp_path / "missing") == []


def test_collect_loads_files_into_one_tree(tmp_path):
    write(
        tmp_path / "helpers.py",
        """
        def answer():
            return 42
        """,
    )
    write(
        tmp_path / "math_spec.py",
        """
        from helpers import answer
        from scopespec import describe, eq, expect, it, let

        with describe("math"):
            let("x", lambda ex: answer())
            it(lambda ex: expect(ex.x).to(eq(42)))
        """,
    )
    write(
        tmp_path / "strings_spec.py",
        """
        from scopespec import describe, expect, it, start_with

        with describe("strings"):
            it(lambda ex: expect("abc").to(start_with("a")))
        """,
    )

    tree = collect(tmp_path)
    spec_run = Runner().run(tree)

    assert [s.description for s in tree.root.children] == ["math", "strings"]
    assert [r.status for r in spec_run.results] == [ExampleStatus.PASSED] * 2


def test_collect_same_file_twice_loads_once(tmp_path):
    spec = write(
        tmp_path / "once_spec.py",
        """
        from scopespec import describe, it

        with describe("once"):
            it("runs", lambda ex: None)
        """,
    )

    tree = collect([spec, tmp_path])

    assert len(tree.examples()) == 1


def test_import_error_becomes_spec_load_error(tmp_path):
    write(tmp_path / "broken_spec.py", "import does_not_exist_anywhere\n")

    with pytest.raises(SpecLoadError) as excinfo:
        collect(tmp_path)

    assert excinfo.value.path.name == "broken_spec.py"
    assert isinstance(excinfo.value.cause, ModuleNotFoundError)


def test_declaration_errors_propagate_unwrapped(tmp_path):
    write(
        tmp_path / "dupe_spec.py",
        """
        from scopespec import describe, let

        with describe("dupe"):
            let("x", lambda ex: 1)
            let("x", lambda ex: 2)
        """,
    )

    with pytest.raises(DuplicateBindingError):
        collect(tmp_path)
