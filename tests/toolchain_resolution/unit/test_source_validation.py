"""Tests for source file validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from cp_tester.errors import FailureStage, UnsupportedFileType
from cp_tester.toolchain_resolution.source_validation import (
    toolchain_kind_for,
    validate_source_file,
)
from cp_tester.toolchain_resolution.toolchain_models import ToolchainKind


@pytest.mark.parametrize(
    ("file_name", "kind"),
    [
        ("main.c", ToolchainKind.C),
        ("main.cpp", ToolchainKind.CPP),
        ("Main.java", ToolchainKind.JAVA),
        ("main.py", ToolchainKind.PYTHON),
    ],
)
def test_supported_extensions_map_to_toolchains(file_name: str, kind: ToolchainKind) -> None:
    assert toolchain_kind_for(Path(file_name)) == kind


def test_validate_returns_absolute_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "main.py").write_text("print(1)\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    resolved = validate_source_file("main.py")

    assert resolved.is_absolute()
    assert resolved == (tmp_path / "main.py").resolve()


def test_validate_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedFileType, match="there is no file"):
        validate_source_file(tmp_path / "main.cpp")


def test_validate_rejects_directory(tmp_path: Path) -> None:
    folder = tmp_path / "main.cpp"
    folder.mkdir()

    with pytest.raises(UnsupportedFileType, match="is a folder"):
        validate_source_file(folder)


@pytest.mark.parametrize("file_name", ["main.rs", "main.CPP", "Makefile"])
def test_validate_rejects_unsupported_extension(tmp_path: Path, file_name: str) -> None:
    source = tmp_path / file_name
    source.write_text("", encoding="utf-8")

    with pytest.raises(UnsupportedFileType) as error:
        validate_source_file(source)

    assert error.value.stage == FailureStage.RESOLVE
    assert "only C (.c), C++ (.cpp), Java (.java), and Python (.py)" in str(error.value)
