"""Tests for folder-based case loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from cp_tester.case_storage.case_folder_scanner import (
    io_modes_from_names,
    load_test_from_folder,
    scan_case_folder,
)
from cp_tester.case_storage.case_models import IOMode, StoredCase
from cp_tester.errors import CaseIOFailed, InvalidCaseText, NoCasesAvailable


def _write_case(folder: Path, name: str, input_text: str, output_text: str | None) -> None:
    (folder / f"{name}.in").write_text(input_text, encoding="utf-8")
    if output_text is not None:
        (folder / f"{name}.out").write_text(output_text, encoding="utf-8")


def test_scan_pairs_inputs_with_sibling_outputs(tmp_path: Path) -> None:
    _write_case(tmp_path, "1", "3 4\n", "7\n")
    _write_case(tmp_path, "2", "1 1\n", "2\n")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    cases = scan_case_folder(tmp_path, "in", "out")

    assert cases == {
        "1": StoredCase(input="3 4\n", output="7\n"),
        "2": StoredCase(input="1 1\n", output="2\n"),
    }


def test_scan_skips_inputs_without_outputs(tmp_path: Path) -> None:
    _write_case(tmp_path, "1", "3 4\n", "7\n")
    _write_case(tmp_path, "orphan", "9\n", None)

    cases = scan_case_folder(tmp_path, "in", "out")

    assert list(cases) == ["1"]


def test_scan_is_idempotent(tmp_path: Path) -> None:
    for index in range(1, 6):
        _write_case(tmp_path, str(index), f"{index}\n", f"{index * 2}\n")

    first = scan_case_folder(tmp_path, "in", "out")
    second = scan_case_folder(tmp_path, "in", "out")

    assert len(first) == 5
    assert first == second


def test_scan_raises_when_no_pairs_exist(tmp_path: Path) -> None:
    _write_case(tmp_path, "orphan", "9\n", None)

    with pytest.raises(NoCasesAvailable) as error:
        scan_case_folder(tmp_path, "in", "out")

    assert '".in"' in str(error.value)
    assert '".out"' in str(error.value)


def test_scan_raises_for_unreadable_folder(tmp_path: Path) -> None:
    with pytest.raises(CaseIOFailed):
        scan_case_folder(tmp_path / "missing", "in", "out")


def test_scan_rejects_non_text_case_data(tmp_path: Path) -> None:
    (tmp_path / "1.in").write_bytes(b"\x80\x81")
    (tmp_path / "1.out").write_text("1\n", encoding="utf-8")

    with pytest.raises(InvalidCaseText) as error:
        scan_case_folder(tmp_path, "in", "out")

    assert error.value.case_name == "1"


def test_scan_honours_custom_extensions(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("in", encoding="utf-8")
    (tmp_path / "a.ans").write_text("out", encoding="utf-8")
    (tmp_path / "b.in").write_text("in", encoding="utf-8")
    (tmp_path / "b.out").write_text("out", encoding="utf-8")

    cases = scan_case_folder(tmp_path, "txt", "ans")

    assert list(cases) == ["a"]


def test_load_test_from_folder_keeps_metadata(tmp_path: Path) -> None:
    _write_case(tmp_path, "1", "3 4\n", "7\n")

    test = load_test_from_folder(
        tmp_path,
        "in",
        "out",
        IOMode.file("paint"),
        provenance={"source": "usaco"},
    )

    assert test.input_mode == IOMode.file("paint")
    assert test.output_mode == IOMode.standard()
    assert test.provenance == {"source": "usaco"}
    assert test.sorted_case_names() == ["1"]


def test_io_modes_from_names() -> None:
    assert io_modes_from_names(()) == (IOMode.standard(), IOMode.standard())
    assert io_modes_from_names(("paint",)) == (IOMode.file("paint"), IOMode.file("paint"))
    assert io_modes_from_names(("in", "out")) == (IOMode.file("in"), IOMode.file("out"))
    with pytest.raises(ValueError):
        io_modes_from_names(("a", "b", "c"))
