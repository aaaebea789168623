"""Boundary tests for component internal dependencies."""

from __future__ import annotations

from pathlib import Path


def _package_dir() -> Path:
    return Path(__file__).resolve().parents[3] / "src" / "cp_tester"


def _assert_no_imports(component: str, forbidden: tuple[str, ...]) -> None:
    for module_path in (_package_dir() / component).glob("*.py"):
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden:
            assert fragment not in text, f"Forbidden dependency in {module_path}: {fragment}"


def test_comparator_is_a_leaf_component() -> None:
    _assert_no_imports(
        "output_comparison",
        (
            "cp_tester.case_storage",
            "cp_tester.process_supervision",
            "cp_tester.run_execution",
            "cp_tester.verdict_reporting",
            "subprocess",
        ),
    )


def test_case_store_does_not_depend_on_execution() -> None:
    _assert_no_imports(
        "case_storage",
        (
            "cp_tester.process_supervision",
            "cp_tester.run_execution",
            "cp_tester.toolchain_resolution",
        ),
    )


def test_timeout_governor_knows_nothing_about_cases() -> None:
    _assert_no_imports(
        "process_supervision",
        ("cp_tester.case_storage", "cp_tester.run_execution", "cp_tester.verdict_reporting"),
    )


def test_engine_does_not_import_cli() -> None:
    for component in (
        "case_storage",
        "configuration",
        "output_comparison",
        "process_supervision",
        "run_execution",
        "toolchain_resolution",
        "verdict_reporting",
    ):
        _assert_no_imports(component, ("cp_tester.cli",))
